from __future__ import annotations

import logging
import sys
from typing import Optional

from catalog.config import LOG_FORMAT, LOG_LEVEL

ROOT_LOGGER_NAME = "catalog"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Install a single stream handler on the package logger.
    Safe to call more than once: the handler is only added the first time,
    later calls just change the level.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel((level or LOG_LEVEL).upper())

    if not any(h.get_name() == ROOT_LOGGER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(ROOT_LOGGER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
