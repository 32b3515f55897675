"""Tests for package logging setup."""

import logging
import os
from unittest.mock import patch

import pytest

from mortgage_planner.config import get_settings
from mortgage_planner.logging_config import PACKAGE_LOGGER, configure_logging


@pytest.fixture
def package_logger():
    """Restore the package logger after each test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestConfigureLogging:
    """Test configure_logging."""

    def test_level_from_settings(self, package_logger):
        """Test the logger level follows MORTGAGE_LOG_LEVEL."""
        with patch.dict(os.environ, {"MORTGAGE_LOG_LEVEL": "WARNING"}, clear=True):
            settings = get_settings()

        logger = configure_logging(settings)

        assert logger is package_logger
        assert logger.level == logging.WARNING

    def test_handler_added_once(self, package_logger):
        """Test repeated calls do not stack handlers."""
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings()

        configure_logging(settings)
        configure_logging(settings)

        tagged = [h for h in package_logger.handlers if getattr(h, "_mortgage_planner", False)]
        assert len(tagged) == 1

    def test_child_loggers_inherit_level(self, package_logger):
        """Test module loggers pick up the package level."""
        with patch.dict(os.environ, {"MORTGAGE_LOG_LEVEL": "DEBUG"}, clear=True):
            configure_logging(get_settings())

        child = logging.getLogger("mortgage_planner.models.scenario_runner")
        assert child.getEffectiveLevel() == logging.DEBUG
