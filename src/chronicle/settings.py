# src/chronicle/settings.py
"""Configuration management for Chronicle.

This module contains the settings that shape the time index: how wide a
chunk is, where chunk boundaries are anchored, and how deep the time tree
goes. Settings are passed programmatically - the library does not read from
environment variables.

For applications that want env-based config, read env vars at the
application layer (see ``chronicle.config``) and pass values explicitly.

All writers sharing one store must agree on these values; changing them
for an existing store moves every chunk boundary and node address.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Literal

from pydantic import BaseModel, field_validator

Granularity = Literal["year", "month", "day", "hour", "minute", "second"]

# Calendar fields from coarsest to finest
TIME_UNITS: tuple[Granularity, ...] = ("year", "month", "day", "hour", "minute", "second")

# Preset definitions for common deployments
# - "fine": small chunks and second-level leaves for busy, recent-first feeds
# - "coarse": week-long chunks and hour-level leaves for sparse archives
INDEX_PRESETS: dict[str, dict[str, Any]] = {
    "fine": {
        "max_chunk_interval": 3600,
        "granularity": "second",
    },
    "coarse": {
        "max_chunk_interval": 7 * 86400,
        "granularity": "hour",
    },
}


class Settings(BaseModel):
    """Behavioral settings for the time index.

    Example:
        settings = Settings(max_chunk_interval=3600, granularity="minute")

        # Or start from a preset
        settings = Settings.with_preset("coarse")
    """

    # Chunk chain
    max_chunk_interval: int = 86400  # Chunk width in whole seconds
    chunk_epoch: datetime = datetime(1970, 1, 1, tzinfo=UTC)

    # Time tree depth (deepest calendar field indexed)
    granularity: Granularity = "second"

    # Queries
    default_limit: int = 10

    @field_validator("max_chunk_interval", "default_limit")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("chunk_epoch")
    @classmethod
    def _aware_whole_seconds(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        if value.microsecond:
            raise ValueError("chunk_epoch must fall on a whole second")
        return value.astimezone(UTC)

    @property
    def chunk_interval(self) -> timedelta:
        return timedelta(seconds=self.max_chunk_interval)

    @property
    def time_units(self) -> tuple[Granularity, ...]:
        """Calendar fields indexed by the time tree, coarsest first."""
        return TIME_UNITS[: TIME_UNITS.index(self.granularity) + 1]

    @classmethod
    def with_preset(
        cls,
        preset: Literal["fine", "coarse"],
        **overrides: Any,
    ) -> Settings:
        """Create Settings from a named preset.

        Args:
            preset: The preset to use.
            **overrides: Additional settings to override preset defaults.

        Returns:
            Settings instance with preset values applied.
        """
        if preset not in INDEX_PRESETS:
            raise ValueError(
                f"Unknown preset '{preset}'. Available presets: {list(INDEX_PRESETS.keys())}"
            )

        preset_settings: dict[str, Any] = INDEX_PRESETS[preset].copy()
        preset_settings.update(overrides)
        return cls(**preset_settings)
