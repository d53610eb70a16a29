# tests/test_addressing.py
"""Tests for content addressing."""

from chronicle.addressing import anchor_record, canonical_json, content_address


class TestContentAddress:
    def test_deterministic(self):
        assert content_address({"a": 1, "b": [1, 2]}) == content_address({"a": 1, "b": [1, 2]})

    def test_key_order_does_not_matter(self):
        assert content_address({"a": 1, "b": 2}) == content_address({"b": 2, "a": 1})

    def test_different_content_different_address(self):
        assert content_address({"a": 1}) != content_address({"a": 2})

    def test_sha256_hex(self):
        address = content_address({"a": 1})
        assert len(address) == 64
        int(address, 16)

    def test_canonical_json_is_compact(self):
        assert canonical_json({"b": 1, "a": "x"}) == '{"a":"x","b":1}'

    def test_anchor_records_differ_by_name(self):
        assert content_address(anchor_record("one")) != content_address(anchor_record("two"))
