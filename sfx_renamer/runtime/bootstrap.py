"""
Bootstrap Module

Logging setup for the command-line entry point. Library code only creates
module loggers; handlers are installed here, once, by the application.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

# Chatty third-party loggers
QUIET_LOGGERS = ("jieba", "aiohttp", "asyncio")

logger = logging.getLogger(__name__)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure root logging.

    Args:
        level: Console level (name or number)
        log_file: Optional path of a rotating DEBUG-level log file
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(min(level, logging.DEBUG) if log_file else level)
    for handler in root.handlers:
        if not isinstance(handler, RotatingFileHandler):
            handler.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if log_file is None:
        return

    log_path = Path(log_file).expanduser()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning(f"Could not set up file logging at {log_path}: {e}")
        return

    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
    logger.debug(f"Log file: {log_path}")
