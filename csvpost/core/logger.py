from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "csvpost"
LOG_FILE_NAME = "csvpost.log"


def configure_logger(log_dir: Path, *, verbose: bool = False) -> logging.Logger:
    """Return the ``csvpost`` logger writing to ``<log_dir>/csvpost.log``.

    Handlers from an earlier call are dropped first, so configuring twice in one
    process does not duplicate records. When the directory cannot be created the
    logger is left without a file handler; see :func:`log_file_path`.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        base = Path(log_dir)
        base.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            base / LOG_FILE_NAME, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
    except OSError:
        logger.addHandler(logging.NullHandler())
        return logger

    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)
    return logger


def log_file_path(logger: logging.Logger) -> Path | None:
    """Return the file the logger writes to, or ``None`` for console-only runs."""

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return Path(handler.baseFilename)
    return None


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger or one of its children."""

    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
