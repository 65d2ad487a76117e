"""Logging helpers for the rocket locator."""

from __future__ import annotations

import logging

LOG_FORMAT = "[%(levelname)s] %(message)s"


def get_logger(name: str = "rocket_locator", level: int | str = logging.INFO) -> logging.Logger:
    """Return ``name``'s logger with a single stream handler attached.

    Child loggers of the package propagate here, so configuring
    ``rocket_locator`` once covers the decoders, geometry and engine.
    """

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
