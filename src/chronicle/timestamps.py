# src/chronicle/timestamps.py
"""Timestamp parsing and normalization.

All comparisons inside the index happen on timezone-aware UTC datetimes.
On the wire timestamps are ISO-8601 strings.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from chronicle.errors import InvalidArgument

# Tag timestamps are fixed-width so tags sort lexicographically in time order.
# strftime does not zero-pad years below 1000 on every platform, so the
# year is formatted separately.
TAG_FORMAT = "-%m-%dT%H:%M:%S.%fZ"
TAG_WIDTH = len("0000-00-00T00:00:00.000000Z")

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 string or datetime into an aware UTC datetime.

    Naive values are interpreted as UTC.

    Raises:
        InvalidArgument: If the value is not a datetime or parseable string.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidArgument("Timestamp must not be empty")
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidArgument(f"Malformed timestamp: {value!r}") from e
    else:
        raise InvalidArgument(f"Expected ISO-8601 string or datetime, got {type(value).__name__}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def split_timestamp(value: datetime) -> tuple[int, int]:
    """Return the ``(seconds, microseconds)`` pair since the Unix epoch."""
    delta = parse_timestamp(value) - EPOCH
    seconds = delta.days * 86400 + delta.seconds
    return seconds, delta.microseconds


def from_seconds(seconds: int, microseconds: int = 0) -> datetime:
    """Inverse of :func:`split_timestamp`."""
    return EPOCH + timedelta(seconds=seconds, microseconds=microseconds)


def format_timestamp(value: datetime) -> str:
    moment = parse_timestamp(value)
    return f"{moment.year:04d}{moment.strftime(TAG_FORMAT)}"


def parse_tag_timestamp(text: str) -> datetime:
    """Parse a timestamp written by :func:`format_timestamp`."""
    if len(text) != TAG_WIDTH or not text.endswith("Z"):
        raise ValueError(f"Not a tag timestamp: {text!r}")
    return datetime.fromisoformat(text[:-1]).replace(tzinfo=UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)
