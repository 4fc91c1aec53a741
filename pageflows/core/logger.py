"""Logging setup for pageflows entry points.

Library modules log through ``logging.getLogger(__name__)`` and never touch
handlers. The CLI and ``PlaywrightSession`` call ``get_logger()``, which
attaches a rotating file under the work directory and a stdout handler to
the ``pageflows`` logger so every child logger ends up in the same place.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .paths import _work_dir


LOGGER_NAME = "pageflows"
LOG_FILE_NAME = "pageflows.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LOGGER: logging.Logger | None = None


def _level_from_env(default: int = logging.INFO) -> int:
    value = getattr(logging, os.getenv("PAGEFLOWS_LOG_LEVEL", "").upper(), None)
    return value if isinstance(value, int) else default


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the ``pageflows`` logger, configuring its handlers on first use.

    ``PAGEFLOWS_LOG_LEVEL`` sets the initial level (INFO otherwise).
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    base = Path(log_dir) if log_dir is not None else _work_dir() / "logs"
    base.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    reset_logger()
    logger.setLevel(_level_from_env())
    logger.propagate = False

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [
        RotatingFileHandler(base / LOG_FILE_NAME, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"),
        logging.StreamHandler(sys.stdout),
    ]
    for handler in handlers:
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    _LOGGER = logger
    return logger


def reset_logger() -> None:
    """Drop configured handlers so the next ``get_logger()`` starts fresh."""
    global _LOGGER
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _LOGGER = None
