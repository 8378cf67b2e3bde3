"""
Configuration loader for YAML files.

Loads and validates configuration from YAML files into Pydantic models.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from productlens.core.extract.strategies import StrategyRegistry

from .models import BUILTIN_STRATEGY_NAMES, AppConfig, StrategyConfig

ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or validation error."""

    def __init__(self, message: str, path: Path | None = None, details: str | None = None):
        self.path = path
        self.details = details
        super().__init__(message)


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dictionary.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML contents

    Raises:
        ConfigError: If file cannot be read or parsed
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}", path=path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in {path}",
            path=path,
            details=str(e),
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read {path}",
            path=path,
            details=str(e),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}", path=path)
    return data


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in string values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(data, str):
        return ENV_VAR_PATTERN.sub(
            lambda match: os.environ.get(match.group(1), match.group(2) or ""),
            data,
        )
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    return data


def load_app_config(
    path: Path | str | None = None,
    expand_env: bool = True,
) -> AppConfig:
    """Load application configuration from YAML file.

    Args:
        path: Path to app.yaml (default: configs/app.yaml)
        expand_env: Whether to expand environment variables

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid
    """
    if path is None:
        path = Path("configs/app.yaml")
        # The default file is optional
        if not path.exists():
            return AppConfig()
    else:
        path = Path(path)

    data = _load_yaml_file(path)

    if expand_env:
        data = _expand_env_vars(data)

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid app configuration in {path}",
            path=path,
            details=str(e),
        ) from e


def load_strategy_config(
    path: Path | str,
    expand_env: bool = True,
) -> StrategyConfig:
    """Load a single strategy configuration from YAML file.

    Args:
        path: Path to strategy YAML file
        expand_env: Whether to expand environment variables

    Returns:
        Validated StrategyConfig instance

    Raises:
        ConfigError: If configuration is invalid
    """
    path = Path(path)
    data = _load_yaml_file(path)

    if expand_env:
        data = _expand_env_vars(data)

    try:
        return StrategyConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid strategy configuration in {path}",
            path=path,
            details=str(e),
        ) from e


def load_all_strategy_configs(
    strategies_dir: Path | str,
    expand_env: bool = True,
) -> list[StrategyConfig]:
    """Load all strategy configurations from a directory.

    Files are loaded in name order so registration order is stable.
    Files whose name starts with an underscore are skipped.

    Args:
        strategies_dir: Directory containing strategy YAML files
        expand_env: Whether to expand environment variables

    Returns:
        List of StrategyConfig in file name order

    Raises:
        ConfigError: If any configuration is invalid
    """
    strategies_dir = Path(strategies_dir)
    if not strategies_dir.exists():
        return []

    files = sorted(
        [*strategies_dir.glob("*.yaml"), *strategies_dir.glob("*.yml")],
        key=lambda p: p.name,
    )
    return [
        load_strategy_config(path, expand_env=expand_env)
        for path in files
        if not path.name.startswith("_")
    ]


def load_registry(config: AppConfig) -> StrategyRegistry:
    """Build the strategy registry described by an app configuration.

    Args:
        config: Loaded application configuration

    Returns:
        StrategyRegistry with built-in and custom strategies

    Raises:
        ConfigError: If strategy files are invalid or names collide
    """
    extra = load_all_strategy_configs(config.strategies_dir) if config.strategies_dir else []

    try:
        return config.build_registry(extra)
    except ValueError as e:
        raise ConfigError(
            "Conflicting strategy definitions",
            path=config.strategies_dir,
            details=str(e),
        ) from e


def validate_strategy_config_file(
    path: Path | str,
    expand_env: bool = True,
) -> list[str]:
    """Validate a strategy configuration file without registering it.

    Applies the same checks as loading it into a registry: environment
    expansion, model validation, and built-in name reservation.

    Args:
        path: Path to strategy YAML file
        expand_env: Whether to expand environment variables

    Returns:
        List of validation error messages (empty if valid)
    """
    path = Path(path)
    errors: list[str] = []

    if not path.exists():
        errors.append(f"File not found: {path}")
        return errors

    try:
        data = _load_yaml_file(path)
    except ConfigError as e:
        errors.append(str(e))
        return errors

    if expand_env:
        data = _expand_env_vars(data)

    try:
        config = StrategyConfig.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            errors.append(f"{loc}: {msg}" if loc else msg)
        return errors

    if config.name in BUILTIN_STRATEGY_NAMES:
        errors.append(f"name: strategy name '{config.name}' is reserved for a built-in strategy")

    return errors
