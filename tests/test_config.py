"""Tests for configuration module"""
import os
import tempfile
from pathlib import Path
from unittest.mock import patch
import pytest
from pydantic import ValidationError

from config import Config


class TestConfig:
    """Test configuration validation and parsing"""

    def test_default_config(self, openstack_env):
        """Test default configuration values"""
        config = Config()

        assert config.os_auth_url == "http://keystone:5000/v3"
        assert config.os_user_domain_name == "Default"
        assert config.os_project_domain_name == "Default"
        assert config.os_interface == "public"
        assert config.verify_tls is True
        assert config.http_timeout == 10.0
        assert config.metrics_prefix == "openstack"
        assert config.metrics_port == 9180
        assert config.metrics_host == "0.0.0.0"
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.enabled_exporters == ["neutron"]

    def test_missing_credentials(self):
        """Test the OpenStack credentials are required"""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Config()

    def test_environment_override(self, openstack_env):
        """Test configuration override from environment variables"""
        env_vars = {
            "OS_AUTH_URL": "https://identity.example.com:5000/v3/",
            "OS_INTERFACE": "internal",
            "OS_INSECURE": "true",
            "HTTP_TIMEOUT": "2.5",
            "METRICS_PREFIX": "cloud",
            "METRICS_PORT": "8080",
            "LOG_LEVEL": "DEBUG",
            "ENABLED_EXPORTERS_STR": "neutron, nova ,"
        }

        with patch.dict(os.environ, env_vars):
            config = Config()

            assert config.os_auth_url == "https://identity.example.com:5000/v3"
            assert config.os_interface == "internal"
            assert config.verify_tls is False
            assert config.http_timeout == 2.5
            assert config.metrics_prefix == "cloud"
            assert config.metrics_port == 8080
            assert config.log_level == "DEBUG"
            assert config.enabled_exporters == ["neutron", "nova"]

    def test_validation_interface(self, openstack_env):
        """Test only known catalog interfaces are accepted"""
        with patch.dict(os.environ, {"OS_INTERFACE": "private"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_http_timeout(self, openstack_env):
        """Test the HTTP timeout must be positive"""
        with patch.dict(os.environ, {"HTTP_TIMEOUT": "0"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_metrics_port(self, openstack_env):
        """Test validation of metrics port"""
        with patch.dict(os.environ, {"METRICS_PORT": "0"}):
            with pytest.raises(ValidationError):
                Config()

        with patch.dict(os.environ, {"METRICS_PORT": "70000"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_metrics_prefix(self, openstack_env):
        """Test an empty metric prefix is rejected"""
        with patch.dict(os.environ, {"METRICS_PREFIX": "__"}):
            with pytest.raises(ValidationError):
                Config()

    def test_log_directory_creation(self, openstack_env):
        """Test that the log file parent directory is created"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = Path(tmp_dir) / "subdir" / "exporter.log"

            with patch.dict(os.environ, {"LOG_FILE": str(log_file)}):
                config = Config()

                assert config.log_file == log_file
                assert log_file.parent.exists()
