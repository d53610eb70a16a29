# tests/commands/test_chunks_cmd.py
"""Tests for the chunks command."""

from chronicle.commands import chunks, index


class TestChunksCommand:
    """Tests for chunks.chunks()."""

    def test_before_indexing(self, temp_dir) -> None:
        result = chunks.chunks(data_dir=temp_dir)

        assert result.success is True
        assert result.interval_seconds == 86400
        assert result.current is not None
        assert result.genesis is None
        assert result.latest is None
        assert result.chunks == []

    def test_after_indexing(self, temp_dir) -> None:
        index.index("a", "{}", "2024-03-01T12:00:00Z", data_dir=temp_dir)
        index.index("b", "{}", "2024-03-05T12:00:00Z", data_dir=temp_dir)

        result = chunks.chunks(data_dir=temp_dir)
        assert result.genesis.from_ == "2024-03-01T00:00:00+00:00"
        assert result.latest.from_ == "2024-03-05T00:00:00+00:00"
        assert len(result.chunks) == 2

    def test_scoped_to_index(self, temp_dir) -> None:
        index.index("a", "{}", "2024-03-01T12:00:00Z", data_dir=temp_dir)
        index.index("b", "{}", "2024-03-05T12:00:00Z", data_dir=temp_dir)

        result = chunks.chunks(index_name="b", data_dir=temp_dir)
        assert [chunk.from_ for chunk in result.chunks] == ["2024-03-05T00:00:00+00:00"]

    def test_hops_clamp_to_genesis(self, temp_dir) -> None:
        index.index("a", "{}", "2024-03-01T12:00:00Z", data_dir=temp_dir)
        result = chunks.chunks(hops=100000, data_dir=temp_dir)
        assert result.previous == result.genesis
