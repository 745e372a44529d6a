"""Loguru-based logging setup."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "recentkit.log"


def setup_logger(log_dir: Path | None = None, verbose: bool = False) -> None:
    """Console output, plus a rotating log file when *log_dir* is given.

    *verbose* lowers the console level to DEBUG; the file always gets DEBUG.
    """
    logger.remove()

    # A windowed build has no stderr
    if sys.stderr is not None:
        logger.add(
            sys.stderr,
            level="DEBUG" if verbose else "INFO",
            format="<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}",
            colorize=True,
        )

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / LOG_FILE_NAME),
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {name}:{line} | {message}",
            rotation="5 MB",
            retention="7 days",
            encoding="utf-8",
        )
