"""JSON logging for applications and scripts embedding the alert client."""
from __future__ import annotations

import logging
from typing import Optional

from pythonjsonlogger import jsonlogger

from opsgenie_alerts.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
CLIENT_LOGGER = "opsgenie_alerts"


def _resolve_level(level: Optional[str]) -> str:
    if level is None:
        level = get_settings().LOG_LEVEL
    return level.strip().upper()


def setup_logging(level: Optional[str] = None) -> logging.Handler:
    """Send every record to stderr as one JSON object per line.

    ``level`` defaults to the ``LOG_LEVEL`` setting. The library never calls
    this on import; request records carry ``method``, ``path`` and
    ``status_code`` as JSON fields.
    """

    resolved = _resolve_level(level)
    root_logger = logging.getLogger()
    # Replace handlers so repeated calls do not duplicate output.
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(resolved)

    handler = logging.StreamHandler()
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    logging.getLogger(CLIENT_LOGGER).debug("Logging configured", extra={"level": resolved})
    return handler


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a module logger under the shared root configuration."""

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level.upper())
    return logger


__all__ = ["LOG_FORMAT", "CLIENT_LOGGER", "setup_logging", "get_logger"]
