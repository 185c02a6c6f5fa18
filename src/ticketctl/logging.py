"""Logging setup for ticketctl.

Each invocation appends to a rotating log file next to the store. stdout
belongs to command output, so records only reach the terminal (stderr) in
verbose mode.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = ".tickets/logs"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_BYTES = 1024 * 1024  # 1MB
DEFAULT_BACKUP_COUNT = 3
LOG_FILE = "ticketctl.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_dir: str | Path | None,
    level: str = DEFAULT_LOG_LEVEL,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    verbose: bool = False,
) -> logging.Logger:
    """Attach handlers to the ticketctl logger.

    Calling it again replaces the previous handlers.

    Args:
        log_dir: Directory for ticketctl.log, created if missing. None skips
                 the log file entirely.
        level: Level name for the file log. Unknown names fall back to INFO.
        max_bytes: Size at which the log file is rotated.
        backup_count: Number of rotated files to keep.
        verbose: Log everything at DEBUG and mirror records to stderr.

    Returns:
        The root ticketctl logger.

    Raises:
        OSError: If the log directory or file can't be created.
    """
    logger = logging.getLogger("ticketctl")
    _remove_handlers(logger)

    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_dir is not None:
        log_path = Path(log_dir) / LOG_FILE
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler()
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    return logger


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component, e.g. 'cli' -> 'ticketctl.cli'."""
    if not name.startswith("ticketctl."):
        name = f"ticketctl.{name}"
    return logging.getLogger(name)
