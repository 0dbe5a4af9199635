"""
Logging utilities for the command line tools.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
command line attaches a single console handler to the package logger.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "grade_matrix"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConsoleLogHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging()."""
    pass


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> ConsoleLogHandler:
    """
    Attach a console handler to the package logger.

    Calling it again replaces the previous handler instead of adding a
    second one.

    Args:
        level: Logging level for the package logger.
        stream: Output stream. None = stderr.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, ConsoleLogHandler):
            logger.removeHandler(handler)

    handler = ConsoleLogHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def detach_console_handler(handler: ConsoleLogHandler) -> None:
    """Remove a handler installed by configure_logging()."""
    logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)
