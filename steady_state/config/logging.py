"""Shared logging configuration."""
from __future__ import annotations

import logging
from typing import Optional

from .settings import get_settings

_LIBRARY_LOGGER = "steady_state"


def _resolve_level(value: int | str | None) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        candidate = logging.getLevelName(value.strip().upper())
        if isinstance(candidate, int):
            return candidate
    candidate = logging.getLevelName(get_settings().LOG_LEVEL)
    if isinstance(candidate, int):
        return candidate
    return logging.WARNING


def configure_logging(level: int | str | None = None) -> None:
    # Only the library logger is touched; handlers belong to the application.
    logging.getLogger(_LIBRARY_LOGGER).setLevel(_resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    # Levels stay with the application until configure_logging() is called.
    return logging.getLogger(name or _LIBRARY_LOGGER)
