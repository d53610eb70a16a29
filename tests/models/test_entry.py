# tests/models/test_entry.py
"""Tests for the Entry and Bucket models."""

from datetime import UTC, datetime

from chronicle.addressing import content_address
from chronicle.models import Bucket, Entry, Link

MOMENT = datetime(2024, 3, 17, 14, 2, 7, tzinfo=UTC)


class TestEntry:
    def test_record_is_deterministic(self):
        assert content_address(Entry.record({"a": 1}, MOMENT)) == content_address(
            Entry.record({"a": 1}, MOMENT)
        )

    def test_record_depends_on_created(self):
        later = MOMENT.replace(second=8)
        assert content_address(Entry.record({"a": 1}, MOMENT)) != content_address(
            Entry.record({"a": 1}, later)
        )

    def test_from_record(self):
        record = Entry.record({"kind": "login"}, MOMENT)
        entry = Entry.from_record("addr", record)
        assert entry.address == "addr"
        assert entry.content == {"kind": "login"}
        assert entry.created == MOMENT


class TestBucket:
    def test_targets_keep_order(self):
        bucket = Bucket(
            address="leaf",
            from_=MOMENT,
            until=MOMENT,
            links=[
                Link(source="leaf", target="b", tag="entry:x"),
                Link(source="leaf", target="a", tag="entry:y"),
            ],
        )
        assert bucket.targets == ["b", "a"]

    def test_accepts_from_alias(self):
        bucket = Bucket.model_validate({"address": "leaf", "from": MOMENT, "until": MOMENT})
        assert bucket.from_ == MOMENT
        assert bucket.links == []
