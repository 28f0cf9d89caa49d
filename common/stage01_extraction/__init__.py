"""
Stage 01: Search URL Classification - Specific Dependencies

This package contains utilities specific to Stage 01 (classify_search_urls):
- url_classifier.py: Baidu search URL detection and batch classification
"""

__all__ = [
    'url_classifier',
]
