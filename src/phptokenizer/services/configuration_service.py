"""
Configuration Service - Centralized configuration management.
Defaults, then an optional JSON file, then PHPTOKENIZER_* environment variables.
"""

import os
import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, Any, Optional

from ..exceptions import ConfigurationError

ENV_PREFIX = "PHPTOKENIZER_"
CONFIG_PATH_ENV = "PHPTOKENIZER_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TokenizerConfig:
    """Settings for one tokenizer run."""
    log_level: str = "WARNING"
    debug_mode: bool = False
    report_diagnostics: bool = True
    json_indent: Optional[int] = None  # None keeps the output compact

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log_level: {self.log_level}")
        if self.json_indent is not None and self.json_indent < 0:
            raise ConfigurationError("json_indent must be non-negative")

    @property
    def effective_log_level(self) -> int:
        return logging.DEBUG if self.debug_mode else getattr(logging, self.log_level)


class ConfigurationService:
    """Loads and caches the tokenizer configuration."""

    def __init__(self, config_path: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        config_path = config_path or os.getenv(CONFIG_PATH_ENV)
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[TokenizerConfig] = None

    def get_config(self) -> TokenizerConfig:
        """Get the current configuration, loading it if needed."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self, config_path: Optional[str] = None) -> TokenizerConfig:
        """
        Load configuration from file and environment variables.

        Args:
            config_path: Optional path to a JSON configuration file

        Returns:
            TokenizerConfig instance

        Raises:
            ConfigurationError: If a value fails validation
        """
        config_file = Path(config_path) if config_path else self.config_path
        data: Dict[str, Any] = {}

        if config_file and config_file.exists():
            try:
                with open(config_file, 'r') as f:
                    data = json.load(f)
                self.logger.info(f"Loaded configuration from {config_file}")
            except (OSError, ValueError) as e:
                self.logger.warning(f"Failed to load config from {config_file}: {e}")
                data = {}
        elif config_file:
            self.logger.warning(f"Config file {config_file} does not exist")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_file} must hold a JSON object")

        field_names = {f.name for f in fields(TokenizerConfig)}
        values = {k: v for k, v in data.items() if k in field_names}
        values.update(self._env_overrides())
        return TokenizerConfig(**values)

    def _env_overrides(self) -> Dict[str, Any]:
        """Read overrides from environment variables."""
        overrides: Dict[str, Any] = {}
        defaults = asdict(TokenizerConfig())

        for name, default in defaults.items():
            env_key = f"{ENV_PREFIX}{name.upper()}"
            env_value = os.getenv(env_key)
            if env_value is None:
                continue
            try:
                if isinstance(default, bool):
                    overrides[name] = env_value.lower() in ('true', '1', 'yes', 'on')
                elif name == "json_indent":
                    overrides[name] = None if env_value.lower() in ('', 'none') else int(env_value)
                else:
                    overrides[name] = env_value
                self.logger.debug(f"Applied env override: {env_key}={env_value}")
            except ValueError as e:
                self.logger.warning(f"Failed to parse env var {env_key}={env_value}: {e}")

        return overrides


# Global configuration service instance
_config_service: Optional[ConfigurationService] = None


def get_config_service(config_path: Optional[str] = None) -> ConfigurationService:
    """Get the global configuration service instance."""
    global _config_service
    if _config_service is None or config_path is not None:
        _config_service = ConfigurationService(config_path)
    return _config_service


def reset_config_service() -> None:
    """Reset the global configuration service (mainly for testing)."""
    global _config_service
    _config_service = None
