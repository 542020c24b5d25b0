"""Root logging setup for the API process."""
from __future__ import annotations

import logging

from app.core.config import settings


def configure_logging() -> None:
    """Install a single stream handler on the root logger.

    ``LOG_FORMAT=json`` switches to a JSON-style line for log shippers,
    anything else keeps the readable format used in development.
    """
    level = settings.LOG_LEVEL.upper()

    if settings.LOG_FORMAT == "json":
        formatter = logging.Formatter(
            "{\"timestamp\": \"%(asctime)s\", \"level\": \"%(levelname)s\", "
            "\"name\": \"%(name)s\", \"message\": \"%(message)s\"}"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
        )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
