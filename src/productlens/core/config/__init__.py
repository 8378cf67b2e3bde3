"""Configuration loading and validation."""

from .models import (
    AppConfig,
    LocatorConfig,
    LoggingConfig,
    StrategyConfig,
)
from .loader import (
    ConfigError,
    load_all_strategy_configs,
    load_app_config,
    load_registry,
    load_strategy_config,
    validate_strategy_config_file,
)

__all__ = [
    # Config models
    "AppConfig",
    "LocatorConfig",
    "LoggingConfig",
    "StrategyConfig",
    # Loaders
    "ConfigError",
    "load_app_config",
    "load_strategy_config",
    "load_all_strategy_configs",
    "load_registry",
    "validate_strategy_config_file",
]
