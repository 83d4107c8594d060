from __future__ import annotations

import logging
from typing import Optional

from .config import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def create_logger(name: str, level: Optional[int] = None, propagate: bool = False) -> logging.Logger:
    """Create (or fetch) a module logger with a single stream handler.

    The level defaults to ``Settings.log_level``.
    """
    if level is None:
        level = getattr(logging, get_settings().log_level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = propagate
    return logger
