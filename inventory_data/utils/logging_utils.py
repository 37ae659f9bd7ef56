"""Logging setup shared by the loader, the view-model and the Dash app.

Every logger writes to `LOG_DIR/dashboard.log` (rotated) and to the console.
The level comes from the `LOG_LEVEL` environment variable.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from inventory_data import pipeline_config as config

FILE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"


def _has_handlers_for(logger, log_path):
    return any(
        isinstance(handler, RotatingFileHandler)
        and handler.baseFilename == os.path.abspath(log_path)
        for handler in logger.handlers
    )


def get_logger(name, log_file=None, level=None):
    """Return a logger writing to the rotating dashboard log and the console.

    Calling it again with the same name and file adds no handlers; the level
    is re-applied each time.

    Args:
        name (str): Logger name, usually the module path.
        log_file (Path | None): Log file override. Defaults to
            `LOG_DIR/dashboard.log`.
        level (str | int | None): Level override. Defaults to `LOG_LEVEL`.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or config.LOG_LEVEL)

    log_path = Path(log_file or config.LOG_DIR / config.LOG_FILE_BASENAME)
    if _has_handlers_for(logger, log_path):
        return logger

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(file_handler)

    if not any(type(handler) is logging.StreamHandler for handler in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    return logger
