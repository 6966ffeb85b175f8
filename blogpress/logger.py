"""Logging configuration for blogpress."""

import logging
import os
import sys

ROOT_LOGGER_NAME = "blogpress"


def setup_logger(level: str | None = None) -> logging.Logger:
    """
    Configure the package root logger.

    Module loggers are children of the root logger and propagate to its single
    stdout handler, so this only needs to run once per process.

    Args:
        level: Optional log level override, otherwise BLOGPRESS_LOG_LEVEL

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    log_level = (level or os.getenv("BLOGPRESS_LOG_LEVEL", "WARNING")).upper()
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger underneath the package root logger.

    Args:
        name: Logger name (typically __name__)
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


default_logger = setup_logger()
