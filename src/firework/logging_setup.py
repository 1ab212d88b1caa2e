"""Logging configuration for the firework show."""

from __future__ import annotations

from pathlib import Path
import logging

LOGGER_NAME = "firework"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_file: Path, level: str = "INFO") -> logging.Logger:
    """Configure the application logger to write to ``log_file`` only.

    The terminal is busy drawing frames, so there is no console handler, and
    the logger does not propagate to the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Clear existing handlers to avoid duplication if this function is called again
    if logger.hasHandlers():
        for old in list(logger.handlers):
            old.close()
        logger.handlers.clear()
    logger.addHandler(handler)

    logger.info("Logging initialized. Log file: %s", log_file)
    return logger
