"""Logging for dfopt.

Engine modules log through children of the ``dfopt`` package logger, which
owns the only handler. It writes to stderr at WARNING unless reconfigured.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE = "dfopt"
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the logger for a module, usually called with ``__name__``.

    Names outside the package are placed under ``dfopt.``.

    Example:
        >>> from dfopt.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("bracketing along direction %d", 0)
    """
    package = _package_logger()
    if name is None or name == PACKAGE:
        return package
    if not name.startswith(PACKAGE + "."):
        name = f"{PACKAGE}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Set the level of all dfopt output, e.g. ``"DEBUG"`` or ``logging.INFO``."""
    if isinstance(level, str):
        level = level.upper()
    _package_logger().setLevel(level)


def configure_logging(
    level: int | str = logging.WARNING,
    stream: Optional[TextIO] = None,
    format_string: Optional[str] = None,
) -> None:
    """Send dfopt output to ``stream`` (default stderr) at ``level``."""
    logger = _package_logger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or _FORMAT))
    logger.addHandler(handler)
    set_log_level(level)


__all__ = ["get_logger", "set_log_level", "configure_logging"]
