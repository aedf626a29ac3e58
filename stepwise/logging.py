"""Logging utilities for stepwise.

All loggers live under the ``stepwise`` hierarchy. Only the package logger
carries a handler; module loggers propagate to it, so a single call to
:func:`set_log_level` or :func:`configure_logging` controls every record
emitted by the executor, the solvers and :class:`LoggingObserver`.

The initial level is read from the ``STEPWISE_LOG_LEVEL`` environment
variable and defaults to WARNING.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

PACKAGE = "stepwise"
_LEVEL_ENV_VAR = "STEPWISE_LOG_LEVEL"
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _level_from_env() -> int:
    return _resolve_level(os.getenv(_LEVEL_ENV_VAR, "WARNING"))


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE)
    if not logger.handlers:
        level = _level_from_env()
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.setLevel(level)
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the stepwise logger for ``name``.

    Args:
        name: Module name, typically `__name__`. Names outside the package
            are placed under ``stepwise.``; None returns the package logger.

    Example:
        >>> from stepwise.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Starting Brent run")
    """
    package = _package_logger()
    if name is None or name == PACKAGE:
        return package
    if not name.startswith(PACKAGE + "."):
        name = f"{PACKAGE}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Set the level of the package logger and its handlers.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.) or its name.
    """
    level = _resolve_level(level)
    package = _package_logger()
    package.setLevel(level)
    for handler in package.handlers:
        handler.setLevel(level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Replace the package handler with one writing to ``stream``.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default
            ``[LEVEL] name: message`` layout.
        stream: Output stream (default: sys.stderr).
    """
    package = _package_logger()
    for handler in package.handlers[:]:
        package.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or _FORMAT))
    package.addHandler(handler)
    set_log_level(level)


__all__ = ["PACKAGE", "configure_logging", "get_logger", "set_log_level"]
