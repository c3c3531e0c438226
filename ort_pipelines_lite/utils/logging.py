"""
Logging configuration for ort_pipelines_lite.

All modules log through children of the ``ort_pipelines_lite`` logger, so a
single call to setup_logger configures the whole package. Nothing is
configured on import; applications that never call setup_logger inherit
their own logging setup.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "ort_pipelines_lite"

# ANSI color codes
COLORS = {
    "DEBUG": "\033[36m",    # Cyan
    "INFO": "\033[32m",     # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",    # Red
    "CRITICAL": "\033[31m",
    "RESET": "\033[0m",
}


class ColoredFormatter(logging.Formatter):
    """Formatter adding a level color to console log lines."""

    def format(self, record: logging.LogRecord) -> str:
        record.color = COLORS.get(record.levelname, COLORS["RESET"])
        record.reset = COLORS["RESET"]
        return super().format(record)


def setup_logger(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure the package logger with a colored console handler.

    Args:
        level: Logging level for the package logger and its handlers.
        log_file: Optional path of a plain-text log file. Parent directories
            are created if needed.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Clear existing handlers so repeated setup does not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(
            "%(color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s%(reset)s"
        )
    )
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger or one of its children.

    Args:
        name: Dotted child name, either relative (``"core.pipeline"``) or a
            module ``__name__`` already under the package.

    Returns:
        Logger instance.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
