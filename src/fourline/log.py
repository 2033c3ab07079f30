# src/fourline/log.py

"""
Logging setup for the fourline package.

Modules log through ``logging.getLogger(__name__)``; nothing is printed
until ``configure_logging()`` attaches a handler to the package logger.
"""

from __future__ import annotations

import logging

from fourline.config import LOG_FORMAT, LOG_LEVEL

_LOGGER_BASE = "fourline"

_pkg_logger = logging.getLogger(_LOGGER_BASE)
_pkg_logger.addHandler(logging.NullHandler())


def _normalize_level(level: str | int) -> str | int:
    """Accept ``"debug"``, ``"DEBUG"`` or ``"10"``."""
    if isinstance(level, str):
        s = level.strip()
        if s.isdigit():
            return int(s)
        return s.upper()
    return level


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger and set its level.

    Calling this again only changes the level.
    """
    _pkg_logger.setLevel(_normalize_level(level if level is not None else LOG_LEVEL))

    if not any(getattr(h, "_fourline", False) for h in _pkg_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._fourline = True  # type: ignore[attr-defined]
        _pkg_logger.addHandler(handler)

    return _pkg_logger
