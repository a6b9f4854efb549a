"""
Tests for the configuration service.
"""

import json
import logging

import pytest

from phptokenizer.exceptions import ConfigurationError
from phptokenizer.services.configuration_service import (
    ConfigurationService,
    TokenizerConfig,
    get_config_service,
    reset_config_service,
)


class TestTokenizerConfig:
    """Test configuration validation."""

    def test_defaults(self):
        config = TokenizerConfig()

        assert config.log_level == "WARNING"
        assert config.debug_mode is False
        assert config.report_diagnostics is True
        assert config.json_indent is None

    def test_log_level_is_normalized(self):
        assert TokenizerConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError):
            TokenizerConfig(log_level="LOUD")

    def test_negative_indent(self):
        with pytest.raises(ConfigurationError):
            TokenizerConfig(json_indent=-1)

    def test_debug_mode_wins(self):
        config = TokenizerConfig(log_level="ERROR", debug_mode=True)
        assert config.effective_log_level == logging.DEBUG


class TestConfigurationService:
    """Test loading configuration."""

    def test_load_defaults(self):
        config = ConfigurationService().load_config()
        assert config == TokenizerConfig()

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"log_level": "INFO", "json_indent": 4, "unknown": 1}))

        config = ConfigurationService(str(path)).load_config()
        assert config.log_level == "INFO"
        assert config.json_indent == 4

    def test_unreadable_file_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        assert ConfigurationService(str(path)).load_config() == TokenizerConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"report_diagnostics": True}))
        monkeypatch.setenv("PHPTOKENIZER_REPORT_DIAGNOSTICS", "false")
        monkeypatch.setenv("PHPTOKENIZER_DEBUG_MODE", "yes")

        config = ConfigurationService(str(path)).load_config()
        assert config.report_diagnostics is False
        assert config.debug_mode is True

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"json_indent": 1}))
        monkeypatch.setenv("PHPTOKENIZER_CONFIG", str(path))

        assert ConfigurationService().get_config().json_indent == 1

    def test_bad_env_value_is_ignored(self, monkeypatch):
        monkeypatch.setenv("PHPTOKENIZER_JSON_INDENT", "wide")
        assert ConfigurationService().load_config().json_indent is None

    def test_global_service(self):
        service = get_config_service()
        assert get_config_service() is service

        reset_config_service()
        assert get_config_service() is not service
