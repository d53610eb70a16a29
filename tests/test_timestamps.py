# tests/test_timestamps.py
"""Tests for timestamp parsing and normalization."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from chronicle.errors import InvalidArgument
from chronicle.timestamps import (
    EPOCH,
    format_timestamp,
    from_seconds,
    parse_tag_timestamp,
    parse_timestamp,
    split_timestamp,
)


class TestParseTimestamp:
    def test_parses_z_suffix(self):
        parsed = parse_timestamp("2024-03-17T14:02:07Z")
        assert parsed == datetime(2024, 3, 17, 14, 2, 7, tzinfo=UTC)

    def test_naive_string_is_utc(self):
        parsed = parse_timestamp("2024-03-17T14:02:07")
        assert parsed.tzinfo is not None
        assert parsed == datetime(2024, 3, 17, 14, 2, 7, tzinfo=UTC)

    def test_offset_is_normalized_to_utc(self):
        parsed = parse_timestamp("2024-03-17T16:02:07+02:00")
        assert parsed == datetime(2024, 3, 17, 14, 2, 7, tzinfo=UTC)
        assert parsed.utcoffset() == timedelta(0)

    def test_accepts_datetime(self):
        moment = datetime(2024, 3, 17, 9, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_timestamp(moment) == datetime(2024, 3, 17, 14, 0, tzinfo=UTC)

    def test_naive_datetime_is_utc(self):
        assert parse_timestamp(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_malformed_raises(self):
        with pytest.raises(InvalidArgument):
            parse_timestamp("yesterday-ish")

    def test_empty_raises(self):
        with pytest.raises(InvalidArgument):
            parse_timestamp("   ")

    def test_wrong_type_raises(self):
        with pytest.raises(InvalidArgument):
            parse_timestamp(1710684127)  # type: ignore[arg-type]

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            parse_timestamp("not a time")


class TestSplitTimestamp:
    def test_epoch_is_zero(self):
        assert split_timestamp(EPOCH) == (0, 0)

    def test_seconds_and_microseconds(self):
        moment = datetime(1970, 1, 2, 0, 0, 1, 250000, tzinfo=UTC)
        assert split_timestamp(moment) == (86401, 250000)

    def test_before_epoch(self):
        moment = datetime(1969, 12, 31, 23, 59, 59, tzinfo=UTC)
        assert split_timestamp(moment) == (-1, 0)

    def test_from_seconds_inverts_split(self):
        moment = datetime(2024, 3, 17, 14, 2, 7, 123456, tzinfo=UTC)
        assert from_seconds(*split_timestamp(moment)) == moment


class TestTagFormat:
    def test_fixed_width(self):
        early = format_timestamp(datetime(2024, 3, 17, 14, 2, 7, tzinfo=UTC))
        late = format_timestamp(datetime(2024, 3, 17, 14, 2, 7, 5, tzinfo=UTC))
        assert len(early) == len(late)
        assert early < late

    def test_sorts_like_time(self):
        moments = [
            datetime(2023, 12, 31, 23, 59, 59, 999999, tzinfo=UTC),
            datetime(2024, 1, 1, tzinfo=UTC),
            datetime(2024, 10, 1, tzinfo=UTC),
        ]
        tags = [format_timestamp(m) for m in moments]
        assert tags == sorted(tags)

    def test_parse_tag_timestamp(self):
        moment = datetime(2024, 3, 17, 14, 2, 7, 42, tzinfo=UTC)
        assert parse_tag_timestamp(format_timestamp(moment)) == moment

    def test_years_below_1000_are_zero_padded(self):
        moment = datetime(999, 6, 1, tzinfo=UTC)
        tag = format_timestamp(moment)
        assert tag == "0999-06-01T00:00:00.000000Z"
        assert parse_tag_timestamp(tag) == moment

    def test_early_years_sort_before_later_ones(self):
        tags = [
            format_timestamp(datetime(999, 12, 31, tzinfo=UTC)),
            format_timestamp(datetime(1000, 1, 1, tzinfo=UTC)),
        ]
        assert tags == sorted(tags)

    def test_parse_tag_timestamp_rejects_other_text(self):
        with pytest.raises(ValueError):
            parse_tag_timestamp("999-06-01T00:00:00.000000Z")
