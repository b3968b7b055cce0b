"""Logging utilities for gatenoise.

All package loggers live under the ``gatenoise`` namespace, write to stderr
and do not propagate to the root logger. The initial level can be set with
the ``GATENOISE_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _to_level(level: int | str) -> int:
    """Resolve a level name such as ``"debug"`` to its numeric value."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


_DEFAULT_LEVEL = _to_level(os.environ.get("GATENOISE_LOG_LEVEL", "WARNING"))


def _attach_handler(
    logger: logging.Logger, level: int, stream: object, fmt: str
) -> None:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached package logger for ``name``.

    Args:
        name: Usually ``__name__`` of the calling module. Names outside the
            ``gatenoise`` namespace are nested under it. ``None`` gives the
            package root logger.

    Returns:
        A configured :class:`logging.Logger`.

    Example:
        >>> from gatenoise.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("decomposed 4 Kraus operators")
    """
    if name is None or name == "gatenoise":
        logger_name = "gatenoise"
    elif name.startswith("gatenoise."):
        logger_name = name
    else:
        logger_name = f"gatenoise.{name}"

    cached = _loggers.get(logger_name)
    if cached is not None:
        return cached

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        _attach_handler(logger, _DEFAULT_LEVEL, sys.stderr, _FORMAT)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every gatenoise logger, existing and future.

    Args:
        level: Numeric level or level name (``"DEBUG"``, ``"INFO"``, ...).
    """
    global _DEFAULT_LEVEL
    level = _to_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Replace the handlers of all cached loggers.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format. Defaults to ``[LEVEL] name: message``.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _DEFAULT_LEVEL
    level = _to_level(level)
    fmt = format_string or _FORMAT
    target = sys.stderr if stream is None else stream

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        _attach_handler(logger, level, target, fmt)

    _DEFAULT_LEVEL = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
