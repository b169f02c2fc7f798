"""
Logging setup shared by the sudoku_* modules.

    from sudoku_logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "sudoku"
LOG_FORMAT = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child of it for ``name``."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """
    Attach a stderr handler to the package logger (only once) and set its level.
    Called by the CLI; library users configure logging themselves.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(level)
    return logger
