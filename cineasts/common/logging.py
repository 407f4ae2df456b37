# cineasts/common/logging.py
from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "uvicorn.error", level: int | str | None = None) -> logging.Logger:
    """
    Return a logger that plays nice with Uvicorn if running under it.
    If no handlers are set, we add a basicConfig once.

    `level` may be an int or a level name ("DEBUG"); when omitted the
    configured LOG_LEVEL is used.
    """
    if level is None:
        from cineasts.common.settings import get_settings
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)
    logger.setLevel(level)
    return logger
