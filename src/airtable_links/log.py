"""Logging helpers for airtable-links.

The package logger gets a ``NullHandler`` on import, so nothing is printed
unless the host application configures logging or calls ``setup_logging``.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "airtable_links"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def setup_logging(
    level: str | int = "INFO",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a formatted stream handler to the package logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Logging level name or number.
        stream: Output stream. Defaults to stderr.

    Returns:
        The installed handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_airtable_links", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    handler._airtable_links = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return handler


__all__ = ["PACKAGE_LOGGER", "get_logger", "setup_logging"]
