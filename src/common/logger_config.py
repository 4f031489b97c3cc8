# src/common/logger_config.py
"""Console logging for the inventory tools."""

import logging
from typing import Optional

from rich.logging import RichHandler

from src.common.config.settings import settings

# Libraries that log every request or every scheduler tick at INFO
QUIET_LOGGERS = ("requests", "urllib3", "schedule")


def setup_logging(level: Optional[str] = None) -> int:
    """
    Routes all logging through one RichHandler on the root logger.

    `level` overrides LOG_LEVEL from the environment; unknown names fall back to
    INFO. Safe to call more than once. Returns the level that was applied.
    """
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    rich_handler = RichHandler(
        show_time=True,
        show_level=True,
        show_path=False,
        # Product names and sizes are logged inside square brackets
        markup=False,
        rich_tracebacks=True,
        tracebacks_word_wrap=True,
        tracebacks_suppress=[logging],
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [rich_handler]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return log_level
