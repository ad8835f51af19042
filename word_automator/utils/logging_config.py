"""
Logging configuration for the Word automator.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "word_automator"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_file: Optional path of a file that receives every record (DEBUG and up)
        verbose: Show DEBUG records on the console as well

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces earlier handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    """Get the package logger."""
    return logging.getLogger(LOGGER_NAME)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a child logger of the package logger for a module."""
    if module_name == LOGGER_NAME or module_name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")
