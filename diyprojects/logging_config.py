"""Logging setup for the diyprojects console tools."""

from __future__ import annotations

import logging
import os
from typing import Final

APP_LOGGER: Final[str] = "diyprojects"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: str | None, *, debug: bool = False) -> int:
    """Map a ``LOG_LEVEL`` value to a level; unset falls back to debug/info.

    Accepts level names in any case or plain numbers. Unknown names give INFO.
    """
    if not name or not name.strip():
        return logging.DEBUG if debug else logging.INFO
    name = name.strip()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def configure_logging(*, debug: bool = False) -> logging.Logger:
    """Send application log records to stderr and return the app logger."""
    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(resolve_level(os.getenv("LOG_LEVEL"), debug=debug))
    app_logger.propagate = False

    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        app_logger.addHandler(handler)
    return app_logger
