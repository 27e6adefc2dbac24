"""Logging setup shared by all scxdata modules."""

from __future__ import annotations

import logging

from scxdata.config import SCX_LOG_LEVEL

_PACKAGE_LOGGER = "scxdata"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the scxdata namespace."""
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Log level name or number. Defaults to ``SCX_LOG_LEVEL``.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level if level is not None else SCX_LOG_LEVEL)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
