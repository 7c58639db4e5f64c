"""
Logging setup for the booking API.

Handlers are attached to the ``lawncare_api`` package logger rather
than the root logger, so the server's own logging configuration (uvicorn
or a test runner) is left alone while records still propagate to it.
``DEBUG=true`` forces debug output regardless of ``LOG_LEVEL``.
"""

import logging
from pathlib import Path

from lawncare_api.app.core.config import Settings


PACKAGE_LOGGER = "lawncare_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    level = logging.getLevelName(settings.log_level.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the package logger from ``settings`` and return it.

    Safe to call more than once: handlers installed by an earlier call
    are closed and replaced, so a second application built in the same
    process picks up its own level and log file.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(settings))

    for handler in [h for h in logger.handlers if getattr(h, "lawncare_handler", False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.lawncare_handler = True
        logger.addHandler(handler)
    return logger
