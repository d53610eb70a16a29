# tests/test_settings.py
"""Tests for settings.

Settings is a plain BaseModel (no env var reading).
The library is programmatic-first - env vars are read by the application layer.
"""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from chronicle.settings import Settings


class TestSettings:
    def test_default_settings(self):
        """Test Settings has correct defaults."""
        settings = Settings()
        assert settings.max_chunk_interval == 86400
        assert settings.chunk_epoch == datetime(1970, 1, 1, tzinfo=UTC)
        assert settings.granularity == "second"
        assert settings.default_limit == 10

    def test_settings_with_custom_values(self):
        """Test Settings accepts custom values."""
        settings = Settings(
            max_chunk_interval=3600,
            chunk_epoch="2024-01-01T00:00:00Z",
            granularity="minute",
            default_limit=50,
        )
        assert settings.chunk_interval == timedelta(hours=1)
        assert settings.chunk_epoch == datetime(2024, 1, 1, tzinfo=UTC)
        assert settings.granularity == "minute"
        assert settings.default_limit == 50

    def test_time_units(self):
        assert Settings(granularity="day").time_units == ("year", "month", "day")
        assert len(Settings().time_units) == 6

    @pytest.mark.parametrize("field", ["max_chunk_interval", "default_limit"])
    @pytest.mark.parametrize("value", [0, -5])
    def test_rejects_non_positive(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_rejects_unknown_granularity(self):
        with pytest.raises(ValidationError):
            Settings(granularity="fortnight")  # type: ignore[arg-type]

    def test_naive_epoch_is_utc(self):
        settings = Settings(chunk_epoch=datetime(2020, 1, 1))
        assert settings.chunk_epoch.tzinfo is not None

    def test_epoch_offset_is_normalized(self):
        settings = Settings(chunk_epoch="2020-01-01T02:00:00+02:00")
        assert settings.chunk_epoch == datetime(2020, 1, 1, tzinfo=UTC)

    def test_epoch_must_be_whole_second(self):
        with pytest.raises(ValidationError):
            Settings(chunk_epoch="2020-01-01T00:00:00.5Z")

    def test_with_preset_fine(self):
        """Test Settings.with_preset('fine') applies correct values."""
        settings = Settings.with_preset("fine")
        assert settings.max_chunk_interval == 3600
        assert settings.granularity == "second"

    def test_with_preset_coarse(self):
        """Test Settings.with_preset('coarse') applies correct values."""
        settings = Settings.with_preset("coarse")
        assert settings.max_chunk_interval == 7 * 86400
        assert settings.granularity == "hour"

    def test_with_preset_with_overrides(self):
        """Test Settings.with_preset() accepts overrides."""
        settings = Settings.with_preset("coarse", default_limit=25)
        assert settings.granularity == "hour"  # from preset
        assert settings.default_limit == 25  # from override

    def test_with_preset_invalid_raises(self):
        """Test Settings.with_preset() raises on invalid preset."""
        with pytest.raises(ValueError, match="Unknown preset"):
            Settings.with_preset("invalid")  # type: ignore[arg-type]
