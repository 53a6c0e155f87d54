"""Module to create a logger instance."""

import logging
import sys
from functools import lru_cache
from logging import Formatter, Logger, StreamHandler

from virt_storage.config import get_settings

PACKAGE_LOGGER_NAME = "virt_storage"


class StdoutFilter(logging.Filter):
    """Class to redirect logs to stdout."""

    def filter(self, record):
        """Redirect to stdout only logs with level lower or equal then WARNING."""
        return record.levelno <= logging.WARNING


class StderrFilter(logging.Filter):
    """Class to redirect logs to stderr."""

    def filter(self, record):
        """Redirect to stderr only logs with level greater or equal then ERROR."""
        return record.levelno >= logging.ERROR


def create_logger(name: str, level: str | int | None = None) -> Logger:
    """Create a logger with 2 stream handlers.

    Log to stdout messages with level lower or equal then WARNING otherwise log them
    to stderr. Handlers are attached only the first time a logger with the given
    name is created.
    """
    logger = logging.getLogger(name)
    try:
        if level is not None:
            logger.setLevel(level)
        error_msg = None
    except ValueError:
        error_msg = f"Invalid log level: {level}"

    filters = {type(f) for h in logger.handlers for f in h.filters}
    formatter = Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    if StdoutFilter not in filters:
        stdout_handler = StreamHandler(sys.stdout)
        stdout_handler.setFormatter(formatter)
        stdout_handler.addFilter(StdoutFilter())
        logger.addHandler(stdout_handler)

    if StderrFilter not in filters:
        stderr_handler = StreamHandler()
        stderr_handler.setFormatter(formatter)
        stderr_handler.addFilter(StderrFilter())
        logger.addHandler(stderr_handler)

    if error_msg is not None:
        logger.error(error_msg)

    return logger


@lru_cache
def get_logger() -> Logger:
    """Configure the package logger from the application settings.

    Module loggers of the package propagate their records to it. Applications call
    this once; the resolution functions never read the settings themselves.
    """
    return create_logger(PACKAGE_LOGGER_NAME, get_settings().LOG_LEVEL)
