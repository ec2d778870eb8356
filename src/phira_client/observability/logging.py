"""Shared logging utilities for consistent client observability.

Usage example:
    from phira_client.observability.logging import get_logger

    logger = get_logger("phira_client.cache")
    logger.debug("Cache miss for %s %s", "chart", 42)
"""

from __future__ import annotations

import logging
import os
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_LEVEL_ENV = "PHIRA_LOG_LEVEL"


def _configured_level() -> int:
    name = os.getenv(_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelNamesMapping().get(name)
    return logging.INFO if level is None else level


def get_logger(name: str) -> logging.Logger:
    """Return a standard logger configured for UTC timestamps.

    The level comes from `PHIRA_LOG_LEVEL` (e.g. `DEBUG`) and defaults to INFO.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stream handler and a consistent UTC format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_configured_level())
        logger.propagate = False
    return logger
