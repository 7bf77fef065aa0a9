import logging
import os
import sys
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from typing import List

from employee_console.core.config import settings

LOG_FILE_NAME = "console.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"


def _log_level() -> int:
    return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)


def _log_dir() -> str:
    """LOG_DIR, or logs/ beside the package"""
    if settings.LOG_DIR:
        return settings.LOG_DIR
    package_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(package_root, "logs")


@lru_cache()
def _shared_handlers() -> List[logging.Handler]:
    """
    Build the rotating file and stdout handlers once per process.

    Every module logger shares them, so the log file is opened a single time.
    Setting LOG_DIR to "-" logs to stdout only.
    """
    level = _log_level()
    handlers: List[logging.Handler] = []

    if settings.LOG_DIR != "-":
        log_dir = _log_dir()
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=os.path.join(log_dir, LOG_FILE_NAME),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers.append(console_handler)

    return handlers


def get_logger(name):
    """
    Get a logger that writes to the console log file and stdout.

    Args:
        name (str): The name of the logger, typically __name__ of the calling module

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(_log_level())
    logger.propagate = False

    if not logger.handlers:
        for handler in _shared_handlers():
            logger.addHandler(handler)

    return logger
