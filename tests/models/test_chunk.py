# tests/models/test_chunk.py
"""Tests for the Chunk model."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from chronicle.models import Chunk

DAY = timedelta(days=1)


@pytest.fixture
def chunk():
    start = datetime(2024, 3, 17, tzinfo=UTC)
    return Chunk(from_=start, until=start + DAY)


class TestChunk:
    def test_width(self, chunk):
        assert chunk.width == DAY

    def test_contains_is_half_open(self, chunk):
        assert chunk.contains(chunk.from_)
        assert chunk.contains(chunk.until - timedelta(microseconds=1))
        assert not chunk.contains(chunk.until)

    def test_shifted_back(self, chunk):
        previous = chunk.shifted(-1)
        assert previous.until == chunk.from_
        assert previous.width == chunk.width

    def test_shifted_forward_several(self, chunk):
        assert chunk.shifted(3).from_ == chunk.from_ + 3 * DAY

    def test_address_depends_only_on_bounds(self, chunk):
        twin = Chunk(from_=chunk.from_, until=chunk.until)
        assert twin.address == chunk.address
        assert chunk.shifted(1).address != chunk.address

    def test_record(self, chunk):
        record = chunk.record()
        assert record["kind"] == "chunk"
        assert record["until"] - record["from"] == 86400

    def test_validate_from_alias_and_strings(self):
        chunk = Chunk.model_validate(
            {"from": "2024-03-17T00:00:00Z", "until": "2024-03-18T00:00:00Z"}
        )
        assert chunk.from_ == datetime(2024, 3, 17, tzinfo=UTC)

    def test_naive_bounds_become_utc(self):
        chunk = Chunk(from_=datetime(2024, 3, 17), until=datetime(2024, 3, 18))
        assert chunk.from_.tzinfo is not None

    def test_frozen(self, chunk):
        with pytest.raises(ValidationError):
            chunk.until = chunk.from_  # type: ignore[misc]

    def test_serializes_with_from_alias(self, chunk):
        data = chunk.model_dump(by_alias=True)
        assert set(data) == {"from", "until"}
