"""Logging for the parkrank package.

Only the ``parkrank`` logger is configured. Root logging belongs to whatever
hosts the app (uvicorn, gunicorn, a test runner), so importing the servers
never replaces its handlers.
"""

import logging
import sys

from parkrank.config import get_settings

PACKAGE_LOGGER = "parkrank"
HANDLER_NAME = "parkrank-stdout"


def configure_logging(level: str | None = None, format_string: str | None = None) -> logging.Logger:
    """Attach a stdout handler to the package logger and set its level.

    Arguments win over ``Settings.logging``. Safe to call repeatedly: the
    handler installed by an earlier call is replaced rather than duplicated.

    Returns:
        The configured package logger.
    """
    log_settings = get_settings().logging
    log_level = (level or log_settings.level).upper()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(format_string or log_settings.format))
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    package_logger.debug("parkrank logging at %s", log_level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
