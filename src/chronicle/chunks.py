# src/chronicle/chunks.py
"""Chunk chain: fixed-width partitions of time.

Chunks are never linked together explicitly. Every chunk has the same
width, so chunk ``n - 1`` is always ``{from - W, until - W}`` and its
address can be computed without touching the store. The only thing the
store records is which chunks are *materialized* (hold at least one
indexed entry): a link from the global chunk registry anchor, and one from
the root of each index that wrote into the chunk.

Example, with W = 1 day and the Unix epoch as anchor:

    2024-03-16T00:00Z -> 2024-03-17T00:00Z   (genesis, first entry ever)
    2024-03-17T00:00Z -> 2024-03-18T00:00Z   (never written, not stored)
    2024-03-18T00:00Z -> 2024-03-19T00:00Z   (current)

Walking back from the current chunk by 5 hops clamps to genesis.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from chronicle.addressing import Address, anchor_record, content_address
from chronicle.errors import InvalidArgument, NotFound
from chronicle.models import CHUNK_TAG, Chunk
from chronicle.settings import Settings
from chronicle.stores.base import BackingStore
from chronicle.timestamps import from_seconds, parse_timestamp, split_timestamp, utc_now

logger = logging.getLogger(__name__)

REGISTRY_ANCHOR = "chunk_registry"


class ChunkChain:
    """Computes, materializes and walks chunks for one store."""

    def __init__(
        self,
        store: BackingStore,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.settings = settings
        self._clock = clock
        self.registry_address: Address = content_address(anchor_record(REGISTRY_ANCHOR))

    @property
    def interval(self) -> timedelta:
        return self.settings.chunk_interval

    def get_max_chunk_interval(self) -> timedelta:
        return self.interval

    def chunk_for(self, moment: datetime | str) -> Chunk:
        """Return the chunk whose window contains ``moment``. Pure arithmetic."""
        moment = parse_timestamp(moment)
        epoch = self.settings.chunk_epoch
        steps = (moment - epoch) // self.interval
        try:
            start = epoch + self.interval * steps
            return Chunk(from_=start, until=start + self.interval)
        except OverflowError as e:
            raise InvalidArgument(
                f"{moment.isoformat()} falls in a chunk outside the supported date range"
            ) from e

    def get_current_chunk(self) -> Chunk:
        """Chunk covering "now". It may not be materialized yet."""
        return self.chunk_for(self._clock())

    def previous_address(self, chunk: Chunk) -> Address:
        """Address of the chronological predecessor, whether or not it exists."""
        return chunk.shifted(-1).address

    def validate_chunk(self, chunk: Chunk) -> None:
        """Check that a caller-supplied chunk lines up with this chain.

        Raises:
            InvalidArgument: If the width differs from the chunk interval or
                the start is not a whole number of intervals from the epoch.
        """
        if chunk.width != self.interval:
            raise InvalidArgument(
                f"Chunk width {chunk.width} does not match the chunk interval {self.interval}"
            )
        if (chunk.from_ - self.settings.chunk_epoch) % self.interval:
            raise InvalidArgument("Chunk does not follow chunk interval ordering")

    def materialize(self, chunk: Chunk, index_root: Address) -> Address:
        """Record that ``chunk`` holds entries for the index rooted at ``index_root``.

        Safe to repeat; every write is idempotent.
        """
        address = self.store.put(chunk.record())
        tag = f"{CHUNK_TAG}{split_timestamp(chunk.from_)[0]}"
        self.store.put(anchor_record(REGISTRY_ANCHOR))
        self.store.link(self.registry_address, address, tag)
        self.store.link(index_root, address, tag)
        logger.debug("Materialized chunk %s (%s)", chunk.from_.isoformat(), address[:12])
        return address

    def materialized_chunks(self, source: Address | None = None) -> list[Chunk]:
        """Materialized chunks in ascending order.

        Args:
            source: Index root to scope the lookup to. Defaults to the global
                registry, which covers every index.
        """
        links = self.store.links_from(source or self.registry_address, CHUNK_TAG)
        starts = sorted({int(link.suffix) for link in links})
        return [
            Chunk(from_=from_seconds(start), until=from_seconds(start) + self.interval)
            for start in starts
        ]

    def get_genesis_chunk(self) -> Chunk:
        """Earliest chunk that has ever been materialized.

        Raises:
            NotFound: If nothing has been indexed yet.
        """
        chunks = self.materialized_chunks()
        if not chunks:
            raise NotFound("No chunk has been materialized yet")
        return chunks[0]

    def get_latest_chunk(self) -> Chunk:
        """Most recent chunk that has been materialized.

        Raises:
            NotFound: If nothing has been indexed yet.
        """
        chunks = self.materialized_chunks()
        if not chunks:
            raise NotFound("No chunk has been materialized yet")
        return chunks[-1]

    def get_previous_chunk(self, chunk: Chunk, hops: int = 1) -> Chunk:
        """Walk back ``hops`` chunks from ``chunk``.

        The walk is arithmetic and succeeds for chunks that were never
        materialized. Once it passes below genesis it clamps to genesis.

        Raises:
            InvalidArgument: If hops is negative or the chunk is misaligned.
            NotFound: If genesis does not exist yet.
        """
        if hops < 0:
            raise InvalidArgument("hops must not be negative")
        self.validate_chunk(chunk)
        genesis = self.get_genesis_chunk()
        # Whole chunks between genesis and the starting chunk
        available = (chunk.from_ - genesis.from_) // self.interval
        if hops >= available:
            return genesis
        return chunk.shifted(-hops)

    def chunks_between(
        self,
        source: Address,
        start: datetime,
        end: datetime,
        descending: bool = False,
    ) -> list[Chunk]:
        """Materialized chunks of one index overlapping ``[start, end]``."""
        chunks = [
            chunk
            for chunk in self.materialized_chunks(source)
            if chunk.until > start and chunk.from_ <= end
        ]
        if descending:
            chunks.reverse()
        return chunks
