# src/chronicle/config.py
"""Configuration loading utilities for Chronicle.

This module provides configuration loading that can be used by:
- CLI commands
- External applications using Chronicle as a library

It handles:
- Finding and loading chronicle.yaml config files
- Reading CHRONICLE_* environment overrides
- Building Settings objects from multiple sources
- Creating TimeIndex instances from configuration
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

if TYPE_CHECKING:
    from chronicle.configuration import StorageConfig
    from chronicle.index import TimeIndex
    from chronicle.settings import Settings
    from chronicle.stores import BackingStore

# Default paths
DEFAULT_DATA_DIR = "./chronicle_data"
CONFIG_FILES = ["chronicle.yaml", "chronicle.yml", ".chroniclerc"]

STORAGE_KINDS = ("local", "memory")


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "data_dir",
    "storage",
    "settings",
}

VALID_SETTINGS_KEYS = {
    "max_chunk_interval",
    "chunk_interval",  # alias
    "chunk_epoch",
    "granularity",
    "default_limit",
    "preset",
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    storage = config.get("storage")
    if storage is not None and storage not in STORAGE_KINDS:
        warnings.append(f"Unknown storage '{storage}', expected one of: {', '.join(STORAGE_KINDS)}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read index settings from CHRONICLE_* environment variables.

    Returns values that were explicitly set (not defaults), to allow proper
    precedence: YAML settings are used unless overridden by env vars.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    if (val := _safe_int(os.environ.get("CHRONICLE_MAX_CHUNK_INTERVAL"))) is not None:
        result["max_chunk_interval"] = val
    if os.environ.get("CHRONICLE_CHUNK_EPOCH"):
        result["chunk_epoch"] = os.environ["CHRONICLE_CHUNK_EPOCH"]
    if os.environ.get("CHRONICLE_GRANULARITY"):
        result["granularity"] = os.environ["CHRONICLE_GRANULARITY"].lower()
    if (val := _safe_int(os.environ.get("CHRONICLE_DEFAULT_LIMIT"))) is not None:
        result["default_limit"] = val
    if os.environ.get("CHRONICLE_PRESET"):
        result["preset"] = os.environ["CHRONICLE_PRESET"].lower()

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    result: dict[str, Any] = {}

    yaml_settings = config.get("settings", {}) or {}

    # Map YAML keys to Settings field names
    key_mappings = {
        "max_chunk_interval": "max_chunk_interval",
        "chunk_interval": "max_chunk_interval",  # alias
        "chunk_epoch": "chunk_epoch",
        "granularity": "granularity",
        "default_limit": "default_limit",
        "preset": "preset",
    }

    for yaml_key, settings_key in key_mappings.items():
        if yaml_key in yaml_settings:
            result[settings_key] = yaml_settings[yaml_key]

    return result


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables (for CI/CD override)
    2. YAML settings: section
    3. Preset values, if a preset is named
    4. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance

    Raises:
        pydantic.ValidationError: If a value is out of range.
        ValueError: If the preset is unknown.
    """
    from chronicle.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    # Merge: env vars override YAML, which overrides defaults
    merged = {**yaml_settings, **env_settings}

    # A preset affects several settings at once
    preset = merged.pop("preset", None)

    if preset:
        return Settings.with_preset(preset, **merged)
    return Settings(**merged)


def build_storage(config: dict[str, Any], data_dir: str) -> StorageConfig:
    """Pick the storage configuration named in the config file."""
    from chronicle.configuration import LocalStorage, MemoryStorage

    if config.get("storage") == "memory":
        return MemoryStorage()
    return LocalStorage(data_dir)


def resolve_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Data directory precedence: explicit argument, env var, config file, default."""
    return (
        data_dir
        or os.environ.get("CHRONICLE_DATA_DIR")
        or config.get("data_dir")
        or DEFAULT_DATA_DIR
    )


def get_store(data_dir: str | Path) -> BackingStore:
    """Open the SQLite store under ``data_dir`` for read-only commands.

    Unlike :func:`get_time_index` this doesn't need valid settings.
    """
    from chronicle.configuration import LocalStorage

    return LocalStorage(str(data_dir)).build_store()


@dataclass
class ChronicleConfig:
    """Configuration for creating a TimeIndex instance."""

    data_dir: str
    storage: StorageConfig
    settings: Settings
    config_path: str | None = None


def get_chronicle_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ChronicleConfig | ConfigError:
    """Get configuration for creating a TimeIndex.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ChronicleConfig with all settings, or ConfigError if invalid
    """
    resolved_path = Path(config_path) if config_path is not None else find_config_file()
    try:
        config = load_config(resolved_path)
    except (OSError, yaml.YAMLError) as e:
        return ConfigError(
            message=f"Failed to read config file: {e}",
            suggestion="Check that the config file exists and is valid YAML",
        )
    if not isinstance(config, dict):
        return ConfigError(
            message="Config file must contain a mapping at the top level",
            suggestion="See chronicle.yaml in the project README for an example",
        )

    try:
        settings = build_settings(config, get_settings_from_env())
    except (ValidationError, ValueError) as e:
        return ConfigError(
            message=f"Invalid index settings: {e}",
            suggestion="Check the 'settings:' section of chronicle.yaml and CHRONICLE_* env vars",
        )

    effective_data_dir = resolve_data_dir(data_dir, config)
    return ChronicleConfig(
        data_dir=effective_data_dir,
        storage=build_storage(config, effective_data_dir),
        settings=settings,
        config_path=str(resolved_path) if resolved_path is not None else None,
    )


def create_time_index(config: ChronicleConfig) -> TimeIndex:
    """Create a TimeIndex instance from configuration."""
    from chronicle.index import TimeIndex

    return TimeIndex(storage=config.storage, settings=config.settings)


def get_time_index(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> TimeIndex | ConfigError:
    """Create a TimeIndex instance based on configuration.

    This is a convenience function that combines get_chronicle_config and
    create_time_index. For more control, use those functions separately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        Configured TimeIndex instance, or ConfigError if configuration is invalid
    """
    config = get_chronicle_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_time_index(config)
