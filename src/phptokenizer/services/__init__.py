"""Service layer for phptokenizer."""

from .configuration_service import (
    ConfigurationService,
    TokenizerConfig,
    get_config_service,
    reset_config_service,
)

__all__ = [
    "ConfigurationService",
    "TokenizerConfig",
    "get_config_service",
    "reset_config_service",
]
