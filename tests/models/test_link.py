# tests/models/test_link.py
"""Tests for the Link model."""

from datetime import UTC, datetime

from chronicle.models import CHILD_TAG, ENTRY_TAG, Link, entry_tag
from chronicle.timestamps import format_timestamp


class TestLink:
    def test_created_from_entry_tag(self):
        moment = datetime(2024, 3, 17, 14, 2, 7, 500000, tzinfo=UTC)
        link = Link(source="leaf", target="entry", tag=f"{ENTRY_TAG}{format_timestamp(moment)}")
        assert link.created == moment

    def test_created_is_none_for_other_tags(self):
        link = Link(source="root", target="year", tag=f"{CHILD_TAG}2024")
        assert link.created is None

    def test_suffix(self):
        link = Link(source="root", target="year", tag=f"{CHILD_TAG}2024")
        assert link.suffix == "2024"

    def test_suffix_keeps_later_colons(self):
        link = Link(source="a", target="b", tag="entry:2024-03-17T14:02:07.000000Z")
        assert link.suffix == "2024-03-17T14:02:07.000000Z"

    def test_hashable_and_equal_by_value(self):
        one = Link(source="a", target="b", tag="child:1")
        two = Link(source="a", target="b", tag="child:1")
        assert one == two
        assert len({one, two}) == 1

    def test_link_tag_round_trip(self):
        moment = datetime(2024, 3, 17, 14, 2, 7, tzinfo=UTC)
        link = Link(source="leaf", target="entry", tag=entry_tag(moment, "comment:reply"))
        assert link.created == moment
        assert link.link_tag == "comment:reply"

    def test_untagged_entry_link(self):
        moment = datetime(2024, 3, 17, 14, 2, 7, tzinfo=UTC)
        link = Link(source="leaf", target="entry", tag=entry_tag(moment))
        assert link.tag == f"{ENTRY_TAG}{format_timestamp(moment)}"
        assert link.link_tag is None

    def test_link_tag_is_none_for_other_tags(self):
        assert Link(source="a", target="b", tag="child:1").link_tag is None
