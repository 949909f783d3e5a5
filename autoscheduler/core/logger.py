"""
Logging setup shared by all modules.
"""

import logging

from autoscheduler.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "autoscheduler"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(get_settings().LOG_LEVEL.upper())
    return root


def setup_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the package root logger.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Configured logger instance
    """
    _configure_root()
    return logging.getLogger(name)
