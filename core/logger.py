"""Logging helpers for the application.

Provides a convenience `get_logger` factory that attaches a shared stream
handler and a rotating file handler, so every module logs in one format to
both the console and `LOG_DIR/diet_planner.log`.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core.config import settings

LOG_DIR = settings.LOG_DIR
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "diet_planner.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)

_default_level = logging.getLevelName(settings.LOG_LEVEL)
if not isinstance(_default_level, int):
    _default_level = logging.INFO


def get_logger(name: str = __name__, level: int = None) -> logging.Logger:
    """Return a logger wired to the shared stream and file handlers.

    Handlers are attached only once per logger name. `level` defaults to the
    configured `LOG_LEVEL`.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level if level is not None else _default_level)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
