"""
Logging Configuration
Console logging for the ClipStream service
"""

import logging
import sys
from typing import Union


LOGGER_NAME = "clipstream"


def setup_logger(name: str = LOGGER_NAME, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Set up and configure the application logger"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(module)s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get the configured logger instance"""
    return logging.getLogger(name)
