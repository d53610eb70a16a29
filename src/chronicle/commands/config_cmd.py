# src/chronicle/commands/config_cmd.py
"""Config command - display current configuration.

This module provides the config display logic that the CLI uses.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from chronicle.commands.base import ConfigResult, SettingInfo
from chronicle.config import (
    build_settings,
    find_config_file,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
    resolve_data_dir,
    validate_config,
)
from chronicle.settings import INDEX_PRESETS


def _get_setting_source(
    key: str,
    yaml_settings: dict,
    env_settings: dict,
) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    preset = env_settings.get("preset") or yaml_settings.get("preset")
    if preset and key in INDEX_PRESETS.get(preset, {}):
        return "preset"
    return "default"


def config(
    config_path: str | Path | None = None,
) -> ConfigResult:
    """Get current configuration settings.

    Args:
        config_path: Override config file path

    Returns:
        ConfigResult with all settings and their sources
    """
    found_config_path = Path(config_path) if config_path is not None else find_config_file()
    cli_config = load_config(found_config_path)
    env_settings = get_settings_from_env()
    yaml_settings = get_settings_from_yaml(cli_config)

    result = ConfigResult(success=True)
    result.config_path = str(found_config_path) if found_config_path else None
    result.warnings = validate_config(cli_config, found_config_path)
    result.storage = cli_config.get("storage", "local")
    result.data_dir = resolve_data_dir(None, cli_config)

    try:
        settings = build_settings(cli_config, env_settings)
    except (ValidationError, ValueError) as e:
        result.success = False
        result.error = f"Invalid index settings: {e}"
        return result

    setting_keys = [
        ("max_chunk_interval", str(settings.max_chunk_interval)),
        ("chunk_epoch", settings.chunk_epoch.isoformat()),
        ("granularity", settings.granularity),
        ("default_limit", str(settings.default_limit)),
    ]

    for key, value in setting_keys:
        result.settings.append(
            SettingInfo(
                name=key,
                value=value,
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )

    return result
