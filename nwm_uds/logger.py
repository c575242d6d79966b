import logging

from nwm_uds.config import Config

PACKAGE_LOGGER = "nwm_uds"
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s: %(message)s"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name=PACKAGE_LOGGER):
    """
    Module loggers are children of the package logger, which owns the only
    stream handler and takes its level from UDS_LOG_LEVEL.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(_level(Config.LOG_LEVEL))
    return logging.getLogger(name)
