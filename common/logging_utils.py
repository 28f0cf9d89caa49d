"""
Logging setup for the classification stages.

Each run logs to <log_root>/<YYYY-MM-DD>/<file> through a size-rotated
handler, mirrored to the console. Dated directories past the retention
window are pruned on every setup.
"""

from __future__ import annotations

import logging
import sys
import shutil
from datetime import date, datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DIR_DATE_FORMAT = "%Y-%m-%d"


def resolve_log_level(name: str) -> int:
    """Map a level name such as 'debug' to its logging constant (INFO if unknown)."""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def _log_dir_date(path: Path) -> Optional[date]:
    if not path.is_dir():
        return None
    try:
        return datetime.strptime(path.name, LOG_DIR_DATE_FORMAT).date()
    except ValueError:
        return None


def prune_log_dirs(log_root: Path, retention_days: int) -> List[Path]:
    """
    Delete dated run directories older than retention_days.

    Non date-named entries are left alone. A retention of 0 keeps everything.

    Returns:
        The directories that were removed
    """
    if retention_days <= 0:
        return []

    cutoff = datetime.now().date() - timedelta(days=retention_days)
    expired = []
    for child in log_root.iterdir():
        dir_date = _log_dir_date(child)
        if dir_date is not None and dir_date < cutoff:
            expired.append(child)

    for child in expired:
        shutil.rmtree(child, ignore_errors=True)

    return expired


def _build_handlers(log_file: Path, level: int, max_bytes: int,
                    backup_count: int, stream_to_stdout: bool) -> List[logging.Handler]:
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    stream_handler = logging.StreamHandler(sys.stdout if stream_to_stdout else None)

    formatter = logging.Formatter(DEFAULT_FORMAT)
    handlers: List[logging.Handler] = [file_handler, stream_handler]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_rotating_file_logger(
    run_date: str,
    log_filename: str,
    *,
    verbose: bool = False,
    log_level: int = logging.INFO,
    log_root: Union[str, Path] = "logs",
    max_bytes: int = 20 * 1024 * 1024,
    backup_count: int = 5,
    retention_days: int = 14,
    stream_to_stdout: bool = True,
) -> str:
    """
    Point root logging at a rotating file for this run.

    Any handlers already on the root logger are closed and replaced, so
    calling this twice does not duplicate output.

    Args:
        run_date: Date string (YYYY-MM-DD) naming the run directory.
        log_filename: File name inside the run directory.
        verbose: Force DEBUG regardless of log_level.
        log_level: Level used when verbose is False.
        log_root: Parent of the dated run directories.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files kept next to the active one.
        retention_days: Age in days after which run directories are pruned.
        stream_to_stdout: Console output on stdout instead of stderr.

    Returns:
        Path to the active log file as string.
    """
    log_root = Path(log_root)
    log_root.mkdir(parents=True, exist_ok=True)
    prune_log_dirs(log_root, retention_days)

    log_file = log_root / run_date / log_filename
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    effective_level = logging.DEBUG if verbose else log_level
    root_logger.setLevel(effective_level)
    for handler in _build_handlers(log_file, effective_level, max_bytes,
                                   backup_count, stream_to_stdout):
        root_logger.addHandler(handler)

    return str(log_file)
