"""Logging setup for the mortgage planner package."""

import logging
from typing import Optional

from mortgage_planner.config import Settings, get_global_settings

PACKAGE_LOGGER = "mortgage_planner"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the package logger from settings.

    Calling this more than once updates the level but never adds a second
    handler.

    Args:
        settings: Settings to read ``log_level`` from (defaults to global settings)

    Returns:
        The configured package logger
    """
    settings = settings or get_global_settings()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level)

    if not any(getattr(h, "_mortgage_planner", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._mortgage_planner = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
