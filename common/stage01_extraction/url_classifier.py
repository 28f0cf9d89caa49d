"""
Search URL classification utilities.

This module recognises Baidu search-results URLs (``www.baidu.com/s``,
``www.baidu.com/baidu`` and the ``m.`` mobile equivalents) so callers can
special-case that provider.
"""

import re
import logging
from typing import Any, List, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Unanchored and case-sensitive: matches anywhere in the string
BAIDU_SEARCH_PATTERN = re.compile(r'(www|m)\.baidu\.com/(s|baidu)')

BAIDU_CONTENT_TYPE = 'baidu_search'
BAIDU_RULE_NAME = 'baidu_search_url'


def is_baidu_search_url(url: Optional[str]) -> bool:
    """
    Check whether a string contains a Baidu search URL.

    Args:
        url: URL (or any text) to check. None and '' are allowed.

    Returns:
        True if the Baidu search pattern occurs anywhere in the string,
        False otherwise (including None, empty and non-string input)
    """
    if not isinstance(url, str) or not url:
        return False

    return BAIDU_SEARCH_PATTERN.search(url) is not None


class BaiduSearchClassifier:
    """Classifier that tags links pointing at Baidu search results."""

    def classify_url(self, url: Optional[str], title: str = "") -> Optional[Tuple[str, str]]:
        """
        Classify a single URL.

        Args:
            url: URL to classify
            title: Title of the link (optional, for log context)

        Returns:
            Tuple of (content_type, rule_name) if matched, None otherwise
        """
        if is_baidu_search_url(url):
            logger.debug(f"URL matched rule '{BAIDU_RULE_NAME}': {url} ({title})")
            return (BAIDU_CONTENT_TYPE, BAIDU_RULE_NAME)

        return None

    def classify_batch(
        self,
        links: List[Dict[str, Any]]
    ) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """
        Classify a batch of URLs, separating matched from unmatched.

        Args:
            links: List of dicts with 'url' and optional 'title' keys

        Returns:
            Tuple of (classified_links, unclassified_links)
            - classified_links: copies with 'content_type', 'classification_method'
              and 'rule_name' added
            - unclassified_links: links that didn't match, unchanged
        """
        classified = []
        unclassified = []

        for link in links:
            url = link.get('url', '')
            title = link.get('title', '')

            result = self.classify_url(url, title)

            if result:
                content_type, rule_name = result
                classified_link = link.copy()
                classified_link['content_type'] = content_type
                classified_link['classification_method'] = 'regex_rule'
                classified_link['rule_name'] = rule_name
                classified.append(classified_link)
            else:
                unclassified.append(link)

        logger.debug(f"Classified batch: {len(classified)} matched, {len(unclassified)} unmatched")

        return classified, unclassified


def get_classification_stats(
    classified: List[Dict[str, Any]],
    unclassified: List[Dict[str, Any]]
) -> Dict[str, Any]:
    """
    Summarise the result of classify_batch.

    Returns:
        Dict with total, baidu_search, other and match_rate (percentage)
    """
    total = len(classified) + len(unclassified)
    match_rate = (len(classified) / total * 100) if total > 0 else 0.0

    return {
        'total': total,
        'baidu_search': len(classified),
        'other': len(unclassified),
        'match_rate': round(match_rate, 2),
    }
