"""Logging for the webreader package and its command line."""

import logging
import sys
from typing import Optional

LOGGER_NAME = "webreader"

# Short on the terminal, timestamped in files
CONSOLE_FORMAT = "webreader %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Attach handlers to the "webreader" logger.

    Records go to stderr, never stdout, since stdout carries the Markdown
    when webreader is used in a pipe. Fetch failures and converter
    fallbacks log at WARNING, request details at DEBUG.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (unknown names mean WARNING)
        log_file: Also append records to this file
        format_string: Format for both handlers instead of the defaults
        force: Replace handlers installed by an earlier call

    Returns:
        The "webreader" logger
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        logger.addHandler(
            _handler(logging.StreamHandler(sys.stderr), numeric_level, format_string or CONSOLE_FORMAT)
        )
        if log_file:
            logger.addHandler(
                _handler(logging.FileHandler(log_file, encoding="utf-8"), numeric_level, format_string or FILE_FORMAT)
            )

    # Host applications keep their own root configuration
    logger.propagate = False

    return logger
