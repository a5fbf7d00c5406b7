"""Logging setup for the dispatcher entry points."""

from __future__ import annotations

import logging
from pathlib import Path

from .settings import ROOT_PATH, get_setting

LOGGER_NAME = "dispatch"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_path: Path | None = None, level: str | None = None) -> logging.Logger:
    """Attach a file handler to the ``dispatch`` logger tree.

    Library modules only create child loggers (``dispatch.executor`` and so
    on); handlers are installed here, once, by whichever entry point runs.
    """

    logger = logging.getLogger(LOGGER_NAME)
    level_name = level or str(get_setting("logging", "level", default="INFO"))
    logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))

    if log_path is None:
        configured = get_setting("logging", "file", default="storage/logs/dispatch.log")
        log_path = Path(configured)
        if not log_path.is_absolute():
            log_path = ROOT_PATH / log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if not any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == str(log_path.resolve())
        for handler in logger.handlers
    ):
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
