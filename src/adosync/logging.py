"""Logging setup for adosync.

Every module logs through ``logging.getLogger(__name__)``; ``setup_logging``
attaches the handlers to the shared ``adosync`` parent. Response bodies may
echo request headers back, so raw remote text passes through
``sanitize_for_log`` and ``truncate_output`` before it reaches a handler.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "adosync"
LOG_FILE = "adosync.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOGGED_BODY = 2000

# Credentials as they appear in headers, error text and URLs
_REDACTIONS = [
    (re.compile(r"(Basic|Bearer) [A-Za-z0-9+/=._-]+"), r"\1 [REDACTED]"),
    (re.compile(r"token=[A-Za-z0-9._-]+"), "token=[REDACTED]"),
]


def _file_handler(log_dir: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_dir / LOG_FILE,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


def setup_logging(
    log_dir: str | Path | None = None,
    level: str | None = None,
    console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Route ``adosync.*`` records to a rotating file and, optionally, stderr.

    ``ADOSYNC_LOG_DIR`` and ``ADOSYNC_LOG_LEVEL`` apply when the matching
    argument is omitted (defaults: ``./logs`` and INFO). Calling it again
    replaces the previous handlers.

    Returns:
        The ``adosync`` logger.
    """
    directory = Path(log_dir or os.environ.get("ADOSYNC_LOG_DIR", "logs"))
    level_name = (level or os.environ.get("ADOSYNC_LOG_LEVEL", "INFO")).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handlers = [_file_handler(directory, max_bytes, backup_count)]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    logger = logging.getLogger(ROOT_LOGGER)
    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    logger.setLevel(log_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging to %s at %s", directory / LOG_FILE, logging.getLevelName(log_level))
    return logger


def truncate_output(output: str, max_length: int = MAX_LOGGED_BODY) -> str:
    """Cut a long response body down for a log line, noting how much was dropped."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Replace authorization values and token parameters with ``[REDACTED]``."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text
