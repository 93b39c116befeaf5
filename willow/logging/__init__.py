"""
Logging Package

Every framework logger hangs off the 'willow' logger, which
Application.equip() configures through LoggerConfig. Controllers and
route modules get their loggers from getLogger() so their records land
in the same files.
"""
import logging
from typing import Optional

from willow.logging.logger_config import JSONFormatter, LoggerConfig

ROOT_LOGGER = 'willow'

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'ROOT_LOGGER',
    'getLogger',
]


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger inside the 'willow' namespace

    Args:
        name: Logger name, usually __name__ (the 'willow' logger if None)

    Returns:
        'willow.<name>' for names outside the namespace, otherwise the
        named logger

    Example:
        logger = getLogger(__name__)
        logger.info("Route table built")
    """
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER + '.'):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
