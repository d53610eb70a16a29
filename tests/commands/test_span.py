# tests/commands/test_span.py
"""Tests for the span command."""

from chronicle.commands import index, span
from chronicle.traversal import SpanTraversal


def _seed(data_dir: str) -> list[str]:
    addresses = []
    for day in (15, 16, 17):
        result = index.index(
            "events", f'{{"day": {day}}}', f"2024-03-{day}T12:00:00Z", data_dir=data_dir
        )
        addresses.append(result.address)
    return addresses


class TestSpanCommand:
    """Tests for span.span()."""

    def test_descending(self, temp_dir) -> None:
        addresses = _seed(temp_dir)
        result = span.span(
            "events", "2024-03-18T00:00:00Z", "2024-03-01T00:00:00Z", data_dir=temp_dir
        )

        assert result.success is True
        assert result.descending is True
        assert [link.target for link in result.links] == list(reversed(addresses))
        assert result.links[0].created == "2024-03-17T12:00:00+00:00"

    def test_ascending_with_limit(self, temp_dir) -> None:
        addresses = _seed(temp_dir)
        result = span.span(
            "events", "2024-03-01T00:00:00Z", "2024-03-18T00:00:00Z", limit=2, data_dir=temp_dir
        )

        assert result.descending is False
        assert [link.target for link in result.links] == addresses[:2]

    def test_load(self, temp_dir) -> None:
        _seed(temp_dir)
        result = span.span(
            "events", "2024-03-18T00:00:00Z", "2024-03-01T00:00:00Z", load=True, data_dir=temp_dir
        )

        assert [entry.content["day"] for entry in result.entries] == [17, 16, 15]
        assert result.missing == []

    def test_empty(self, temp_dir) -> None:
        result = span.span(
            "events", "2024-03-18T00:00:00Z", "2024-03-01T00:00:00Z", data_dir=temp_dir
        )
        assert result.success is True
        assert result.links == []

    def test_bad_bound(self, temp_dir) -> None:
        result = span.span("events", "tomorrow", "2024-03-01T00:00:00Z", data_dir=temp_dir)
        assert result.success is False

    def test_bad_limit(self, temp_dir) -> None:
        result = span.span(
            "events", "2024-03-18T00:00:00Z", "2024-03-01T00:00:00Z", limit=0, data_dir=temp_dir
        )
        assert result.success is False
        assert "limit" in result.error

    def test_link_tag(self, temp_dir) -> None:
        tagged = index.index(
            "events", '{"n": 1}', "2024-03-16T12:00:00Z", link_tag="alert", data_dir=temp_dir
        )
        index.index("events", '{"n": 2}', "2024-03-17T12:00:00Z", data_dir=temp_dir)

        result = span.span(
            "events",
            "2024-03-18T00:00:00Z",
            "2024-03-01T00:00:00Z",
            link_tag="alert",
            load=True,
            data_dir=temp_dir,
        )
        assert [link.target for link in result.links] == [tagged.address]
        assert result.links[0].link_tag == "alert"
        assert [entry.content for entry in result.entries] == [{"n": 1}]

    def test_load_reuses_fetched_links(self, temp_dir, monkeypatch) -> None:
        _seed(temp_dir)
        calls = []
        original = SpanTraversal.take_links

        def counting_take_links(self, *args, **kwargs):
            calls.append(args)
            return original(self, *args, **kwargs)

        monkeypatch.setattr(SpanTraversal, "take_links", counting_take_links)
        result = span.span(
            "events", "2024-03-18T00:00:00Z", "2024-03-01T00:00:00Z", load=True, data_dir=temp_dir
        )

        assert len(calls) == 1
        assert [entry.address for entry in result.entries] == [
            link.target for link in result.links
        ]
