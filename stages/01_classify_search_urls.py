#!/usr/bin/env python3
"""
Stage 01: Classify search URLs.

This script:
1. Loads URLs from a text, TSV or YAML file
2. Flags Baidu search-results URLs (www./m. baidu.com/s or /baidu)
3. Saves results to data/processed/search_urls_YYYY-MM-DD_HHMMSS.tsv with TAB separator

Usage:
    python stages/01_classify_search_urls.py urls.txt [--output out.tsv] [--date YYYY-MM-DD]

    Or from Python (load the numbered file with importlib first):
    main("urls.txt", run_date="2025-11-09")
"""

import csv
import sys
import logging
import argparse
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml

from config import settings
from common.stage01_extraction.url_classifier import (
    BaiduSearchClassifier,
    get_classification_stats,
)
from common.logging_utils import setup_rotating_file_logger, resolve_log_level

LOG_FILENAME = "01_classify_search_urls.log"
OUTPUT_COLUMNS = ['url', 'title', 'is_baidu_search', 'classified_at']


def setup_logging(run_date: str, verbose: bool = False) -> logging.Logger:
    """
    Configure logging for this stage.

    Args:
        run_date: Date string in YYYY-MM-DD format
        verbose: Enable DEBUG output

    Returns:
        Configured logger instance
    """
    log_file = setup_rotating_file_logger(
        run_date,
        LOG_FILENAME,
        verbose=verbose,
        log_level=resolve_log_level(settings.LOG_LEVEL),
        log_root=settings.LOG_DIR,
        max_bytes=settings.LOG_MAX_BYTES,
        backup_count=settings.LOG_BACKUP_COUNT,
        retention_days=settings.LOG_RETENTION_DAYS,
        stream_to_stdout=True,
    )

    stage_logger = logging.getLogger(__name__)
    stage_logger.info(f"Logging initialized - output to {log_file}")

    return stage_logger


def _load_yaml_urls(path: Path) -> List[Dict[str, str]]:
    logger = logging.getLogger(__name__)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML file {path}: {e}")
        return []

    if not isinstance(data, dict):
        logger.error(f"Expected a mapping with a 'urls' list in {path}")
        return []

    urls = data.get('urls') or []
    if not isinstance(urls, list):
        logger.error(f"Expected 'urls' to be a list in {path}, got {type(urls).__name__}")
        return []

    links = []
    for item in urls:
        if isinstance(item, str):
            links.append({'url': item, 'title': ''})
        elif isinstance(item, dict) and item.get('url'):
            links.append({'url': str(item['url']), 'title': str(item.get('title') or '')})
        else:
            logger.warning(f"Skipping unrecognised entry in {path}: {item!r}")

    return links


def _load_tsv_urls(path: Path) -> List[Dict[str, str]]:
    logger = logging.getLogger(__name__)

    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f, delimiter='\t')
        if not reader.fieldnames or 'url' not in reader.fieldnames:
            logger.error(f"TSV file {path} has no 'url' column")
            return []

        return [
            {'url': row['url'] or '', 'title': row.get('title') or ''}
            for row in reader
            if row.get('url')
        ]


def _load_text_urls(path: Path) -> List[Dict[str, str]]:
    links = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            links.append({'url': line, 'title': ''})
    return links


def load_urls(input_path: str) -> List[Dict[str, str]]:
    """
    Load URLs to classify.

    Supported formats (chosen by extension):
    - .yml/.yaml: mapping with a 'urls' list of strings or {url, title} entries
    - .tsv/.csv: TAB-separated with a 'url' header and optional 'title'
    - anything else: one URL per line, '#' comments and blank lines skipped

    Args:
        input_path: Path to the input file

    Returns:
        List of dicts with 'url' and 'title' keys (empty if the file is missing)
    """
    logger = logging.getLogger(__name__)
    path = Path(input_path)

    if not path.exists():
        logger.error(f"Input file not found: {input_path}")
        return []

    suffix = path.suffix.lower()
    if suffix in ('.yml', '.yaml'):
        links = _load_yaml_urls(path)
    elif suffix in ('.tsv', '.csv'):
        links = _load_tsv_urls(path)
    else:
        links = _load_text_urls(path)

    logger.info(f"Loaded {len(links)} URLs from {input_path}")
    return links


def save_results_to_tsv(links: List[Dict], output_path: str) -> None:
    """
    Save classification results to a TAB-separated file.

    Args:
        links: Dicts with 'url', 'title', 'is_baidu_search' and 'classified_at'
        output_path: Destination file (parent directories are created)
    """
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(
            f,
            fieldnames=OUTPUT_COLUMNS,
            delimiter='\t',
            extrasaction='ignore'
        )
        writer.writeheader()
        writer.writerows(links)


def main(input_path: str, output_path: Optional[str] = None,
         run_date: Optional[str] = None, verbose: bool = False) -> int:
    """
    Run Stage 01.

    Returns:
        Exit code: 0 on success, 1 on failure
    """
    start_time = datetime.now()
    if not run_date:
        run_date = start_time.strftime('%Y-%m-%d')

    logger = setup_logging(run_date, verbose=verbose)

    try:
        logger.info("=" * 60)
        logger.info(f"Stage 01: Classify Search URLs - {run_date}")
        logger.info("=" * 60)

        # Validate configuration
        settings.validate_config()

        links = load_urls(input_path)

        classifier = BaiduSearchClassifier()
        classified, unclassified = classifier.classify_batch(links)
        # unclassified holds the original link objects
        unmatched_ids = {id(link) for link in unclassified}

        classified_at = datetime.now().isoformat(timespec='seconds')
        results = [
            {
                'url': link.get('url', ''),
                'title': link.get('title', ''),
                'is_baidu_search': id(link) not in unmatched_ids,
                'classified_at': classified_at,
            }
            for link in links
        ]

        if not output_path:
            timestamp = start_time.strftime('%H%M%S')
            output_path = str(Path(settings.OUTPUT_DIR) / f"search_urls_{run_date}_{timestamp}.tsv")

        save_results_to_tsv(results, output_path)

        stats = get_classification_stats(classified, unclassified)
        duration = (datetime.now() - start_time).total_seconds()
        logger.info("=" * 60)
        logger.info(f"Stage 01: Classify Search URLs - Completed in {duration:.2f}s")
        logger.info(f"Total URLs: {stats['total']} | Baidu search: {stats['baidu_search']} "
                    f"| Other: {stats['other']} ({stats['match_rate']}% matched)")
        logger.info(f"Results saved to {output_path}")
        logger.info("=" * 60)

        return 0

    except Exception as e:
        logger.error(f"Stage 01 failed with error: {e}", exc_info=True)
        return 1


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description='Flag Baidu search-results URLs (Stage 01)'
    )
    parser.add_argument(
        'input',
        type=str,
        help='Input file: .txt (one URL per line), .tsv or .yml'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Output TSV path (default: data/processed/search_urls_<date>_<time>.tsv)'
    )
    parser.add_argument(
        '--date',
        type=str,
        help='Run date in YYYY-MM-DD format (default: today)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable DEBUG logging'
    )

    args = parser.parse_args()

    exit_code = main(
        input_path=args.input,
        output_path=args.output,
        run_date=args.date,
        verbose=args.verbose
    )
    sys.exit(exit_code)
