"""Logging setup for Libris.

The ``libris`` logger gets a console handler and, when ``log_to_file`` is
set, a size-rotated file under ``log_dir``. Module loggers such as
``libris.api.dispatcher`` sit below it and inherit its handlers.
"""

import logging
import logging.handlers
import os

from libris.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
LOG_FILE_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def setup_logger(settings: Settings, name: str = "libris") -> logging.Logger:
    """Configure ``name`` from the logging fields of ``settings``.

    Calling it again only updates the level; handlers are installed once.

    Raises:
        ValueError: ``settings.log_level`` is not a logging level name
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {settings.log_level}")

    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handlers = [logging.StreamHandler()]
    if settings.log_to_file:
        os.makedirs(settings.log_dir, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                os.path.join(settings.log_dir, f"{name}.log"),
                maxBytes=LOG_FILE_BYTES,
                backupCount=LOG_FILE_BACKUPS,
            )
        )

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
