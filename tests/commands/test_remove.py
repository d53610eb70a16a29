# tests/commands/test_remove.py
"""Tests for the remove command."""

from chronicle.commands import index, remove, span
from chronicle.commands.base import ConfirmRequest


def _span_targets(data_dir: str) -> list[str]:
    result = span.span(
        "events", "2024-03-18T00:00:00Z", "2024-03-01T00:00:00Z", data_dir=data_dir
    )
    return [link.target for link in result.links]


class TestRemoveCommand:
    """Tests for remove.remove()."""

    def test_remove(self, temp_dir) -> None:
        indexed = index.index("events", '{"n": 1}', "2024-03-17T12:00:00Z", data_dir=temp_dir)
        result = remove.remove(indexed.address, data_dir=temp_dir)

        assert result.success is True
        assert result.revoked == 1
        assert _span_targets(temp_dir) == []

    def test_remove_unindexed_is_noop(self, temp_dir) -> None:
        result = remove.remove("0" * 64, data_dir=temp_dir)
        assert result.success is True
        assert result.revoked == 0

    def test_confirm_declined(self, temp_dir) -> None:
        indexed = index.index("events", '{"n": 1}', "2024-03-17T12:00:00Z", data_dir=temp_dir)
        requests: list[ConfirmRequest] = []

        def decline(request: ConfirmRequest) -> bool:
            requests.append(request)
            return False

        result = remove.remove(indexed.address, data_dir=temp_dir, on_confirm=decline)

        assert result.success is False
        assert result.error == "Cancelled."
        assert len(requests) == 1
        assert _span_targets(temp_dir) == [indexed.address]

    def test_confirm_accepted(self, temp_dir) -> None:
        indexed = index.index("events", '{"n": 1}', "2024-03-17T12:00:00Z", data_dir=temp_dir)
        result = remove.remove(indexed.address, data_dir=temp_dir, on_confirm=lambda _: True)
        assert result.revoked == 1

    def test_scoped_to_index(self, temp_dir) -> None:
        indexed = index.index("events", '{"n": 1}', "2024-03-17T12:00:00Z", data_dir=temp_dir)
        index.index("audit", '{"n": 1}', "2024-03-17T12:00:00Z", data_dir=temp_dir)

        result = remove.remove(indexed.address, index_name="audit", data_dir=temp_dir)
        assert result.revoked == 1
        assert _span_targets(temp_dir) == [indexed.address]
