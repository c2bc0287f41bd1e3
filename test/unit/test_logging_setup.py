"""
Unit tests for the logging setup.
"""

import os
import sys
import logging
import pytest

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from xmlsimple.config.settings import Settings
from xmlsimple.logging import setup_logging, setup_logging_from_settings


@pytest.fixture
def logger_name():
    """Logger name, with handlers closed after the test."""
    name = "xmlsimple.test_logging"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_console_only(self, logger_name):
        logger = setup_logging(logger_name)

        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_level_name(self, logger_name):
        assert setup_logging(logger_name, "debug").level == logging.DEBUG

    def test_file_handler(self, logger_name, tmp_path):
        log_dir = tmp_path / "logs"
        logger = setup_logging(logger_name, logging.DEBUG, str(log_dir))
        logger.info("hello")

        assert len(logger.handlers) == 2
        log_files = list(log_dir.glob("xmlsimple-test_logging_*.log"))
        assert len(log_files) == 1

        logger.handlers[1].flush()
        assert "hello" in log_files[0].read_text()

    def test_repeated_setup_replaces_handlers(self, logger_name):
        setup_logging(logger_name)
        logger = setup_logging(logger_name)
        assert len(logger.handlers) == 1

    def test_from_settings(self, logger_name, monkeypatch):
        monkeypatch.delenv("XMLSIMPLE_LOGGING_LEVEL", raising=False)
        monkeypatch.delenv("XMLSIMPLE_LOGGING_LOG_DIR", raising=False)
        settings = Settings(config_dir=None)
        settings.set("logging", "level", "WARNING")

        logger = setup_logging_from_settings(settings, logger_name)
        assert logger.level == logging.WARNING
