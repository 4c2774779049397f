"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain loggers under the ``randdata`` namespace.
    - Allow optional verbose/debug modes for the command line.

Notes/Edge cases:
    - Logging configuration is idempotent; calling :func:`configure_logging`
      twice replaces the level but never stacks handlers.
    - The library itself never installs handlers beyond a ``NullHandler``.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "randdata"
_HANDLER_ATTR = "_randdata_handler"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` placed under the package namespace."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger and set ``level``."""

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False) and isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)
            handler.setLevel(level)
            return logger
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.setLevel(level)
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    return logger


__all__ = ["ROOT_LOGGER_NAME", "get_logger", "configure_logging"]
