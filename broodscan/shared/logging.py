"""Logging configuration utilities."""

import logging
import sys
from typing import List, Optional, TextIO


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    quiet_loggers: Optional[List[str]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure logging for the scanner.

    Readings go to stdout, so log records default to stderr to keep JSON
    line output clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format_string: Custom format string for log messages.
        quiet_loggers: Extra logger names to hold at WARNING.
        stream: Where to write log records, stderr if None.
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=format_string,
        stream=stream or sys.stderr,
    )

    # bleak's own chatter is only useful when debugging the adapter
    noisy = list(quiet_loggers or [])
    if log_level > logging.DEBUG:
        noisy += ["bleak", "asyncio"]

    for logger_name in noisy:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
