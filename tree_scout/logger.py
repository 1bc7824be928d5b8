"""Logging setup for TreeScout.

Every module logs through the ``"TreeScout"`` logger::

    from tree_scout.logger import logger
    logger.info("Crawl started")

The CLI calls :func:`init_logging` once with the user's level, format and
optional log file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_LOGGER_NAME = "TreeScout"
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def init_logging(
    level: int | str = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the project logger and return it.

    Records go to stderr (stdout carries ``crawl --stdout`` output) and, when
    *log_file* is given, to a rotating file (5 MB, 3 backups).
    """
    formatter = logging.Formatter(log_format)
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    lg.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    lg.addHandler(console)

    if log_file is not None:
        rotating = RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        rotating.setFormatter(formatter)
        lg.addHandler(rotating)

    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging"]
