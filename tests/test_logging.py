"""Tests for logging configuration"""
import os
import sys
import logging
from pathlib import Path
from unittest.mock import patch

from config import Config
from logging_config import (
    setup_structured_logging,
    get_logger,
    log_scrape,
    log_server_startup,
    log_error
)


class TestLoggingConfig:
    """Test logging configuration and structured logging"""

    def test_setup_structured_logging(self, openstack_env, tmp_path):
        """Test structured logging setup"""
        log_file = tmp_path / "logs" / "test.log"

        with patch.dict(os.environ, {"LOG_FILE": str(log_file), "LOG_LEVEL": "DEBUG"}):
            config = Config()

        setup_structured_logging(config)

        assert log_file.parent.exists()
        assert logging.getLogger("test").isEnabledFor(logging.DEBUG)
        assert any(getattr(h, "baseFilename", None) == str(log_file) for h in logging.getLogger().handlers)

    def test_setup_without_log_file(self, config):
        """Test logging to stdout only"""
        setup_structured_logging(config)

        handlers = logging.getLogger().handlers
        assert any(getattr(h, "stream", None) is sys.stdout for h in handlers)
        assert not any(isinstance(h, logging.FileHandler) for h in handlers)

    def test_get_logger(self):
        """Test getting structured logger"""
        logger = get_logger("test_logger")

        assert logger is not None
        assert hasattr(logger, 'info')
        assert hasattr(logger, 'error')
        assert hasattr(logger, 'debug')
        assert hasattr(logger, 'warning')

    def test_log_scrape(self):
        """Test structured scrape logging"""
        logger = get_logger("test")

        # This should not raise an exception
        log_scrape(logger, exporters=1, scrape_time=0.5)
        log_scrape(logger, exporters=1, scrape_time=1.2, errors=1)

    def test_log_server_startup(self, config):
        """Test structured server startup logging"""
        logger = get_logger("test")

        # This should not raise an exception
        log_server_startup(logger, config)

    def test_log_error(self):
        """Test structured error logging"""
        logger = get_logger("test")
        error = ValueError("Test error")

        # This should not raise an exception
        log_error(logger, error, {"component": "test"})
        log_error(logger, error)

    def test_development_vs_production_logging(self, config):
        """Test different renderers for development and production"""
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            setup_structured_logging(config)
            get_logger("test").info("Test development log")

        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            setup_structured_logging(config)
            get_logger("test").info("Test production log")
