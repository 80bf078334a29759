"""File logging for todolist.

Everything under the ``todolist`` logger namespace ends up in one rotating
file in the platform log directory. Nothing is written to the terminal; the
CLI reports problems to the user itself.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "todolist"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(APP_NAME)) / f"{APP_NAME}.log"


def get_logger() -> logging.Logger:
    """Return the ``todolist`` logger, attaching its file handler on first use.

    Modules log through ``logging.getLogger(__name__)``; those loggers are
    children of this one and share its handler.
    """
    global _logger
    if _logger is None:
        path = log_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

        logger = logging.getLogger(APP_NAME)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
        _logger = logger
    return _logger


def set_log_level(level: str) -> None:
    """Change the level of the ``todolist`` logger; case-insensitive."""
    get_logger().setLevel(level.upper())
