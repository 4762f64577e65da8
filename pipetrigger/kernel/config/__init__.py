"""Configuration loading and management for pipetrigger."""

from pipetrigger.kernel.config.loader import (
    ConfigLoader,
    clear_config_cache,
    get_default_config,
    load_config,
)
from pipetrigger.kernel.config.models import LoggingConfig, TriggersConfig

__all__ = [
    "ConfigLoader",
    "LoggingConfig",
    "TriggersConfig",
    "clear_config_cache",
    "get_default_config",
    "load_config",
]
