"""Centralized logging helpers.

Every module logs through ``get_logger(component)``. Component loggers are
children of the ``germline`` logger and propagate to it; the stream handler
is installed there once.
"""

from __future__ import annotations

import logging
from typing import Final

_LOGGER_NAME: Final = "germline"


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    root = _package_logger()
    return root.getChild(component) if component else root


def set_level(level: int | str) -> None:
    """Change the threshold for all germline loggers (e.g. ``"DEBUG"``)."""
    _package_logger().setLevel(level)
