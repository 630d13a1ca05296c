"""Logging helpers for the generator."""

import logging
from typing import Optional

_LOGGER_NAME = 'cgo_bindgen'


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the cgo_bindgen hierarchy"""
    full_name = f'{_LOGGER_NAME}.{name}' if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Install a single console handler on the cgo_bindgen logger"""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated invocations do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('[cgo_bindgen] %(levelname)s %(message)s'))
    logger.addHandler(handler)
    return logger
