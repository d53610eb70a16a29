# src/chronicle/index.py
"""Time index facade: index, query and revoke entries by creation time."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chronicle.addressing import Address
from chronicle.chunks import ChunkChain
from chronicle.errors import InvalidArgument, PartialResult
from chronicle.models import ENTRY_TAG, INDEXED_IN_TAG, Bucket, Chunk, Entry, Link, entry_tag
from chronicle.settings import Settings
from chronicle.timestamps import parse_timestamp, utc_now
from chronicle.traversal import SpanTraversal
from chronicle.tree import MIN_TIME, TimeTree

if TYPE_CHECKING:
    from chronicle.configuration import StorageConfig
    from chronicle.stores import BackingStore

logger = logging.getLogger(__name__)

TimestampLike = datetime | str
ChunkLike = Chunk | Mapping[str, Any]


class TimeIndex:
    """Hierarchical time index over a backing store.

    There are two ways to create a TimeIndex:

    1. With a storage configuration:

        from chronicle import LocalStorage, TimeIndex

        index = TimeIndex(storage=LocalStorage("./data"))

    2. With an explicit store:

        from chronicle import TimeIndex
        from chronicle.stores import MemoryStore

        index = TimeIndex.from_store(MemoryStore())

    Then:

        address = index.index_entry("events", {"kind": "login"}, "2024-03-17T14:02:07Z")
        newest_first = index.get_links_for_time_span("events", now, last_week, limit=20)
        oldest_first = index.get_links_for_time_span("events", last_week, now, limit=20)

    The order of the two span bounds picks the result order: ``from > until``
    returns newest first, anything else returns oldest first.
    """

    def __init__(
        self,
        *,
        storage: StorageConfig | None = None,
        store: BackingStore | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create a TimeIndex.

        Args:
            storage: Storage configuration (convenience). Mutually exclusive with store.
                     Example: LocalStorage("./data")
            store: Explicit backing store.
            settings: Chunk width, epoch, tree granularity and default limit.
            clock: Callable returning the current UTC time. Defaults to the
                   system clock; tests inject a fixed one.

        Raises:
            ValueError: If neither or both of storage and store are provided.
        """
        self._settings = settings if settings is not None else Settings()
        self._clock = clock or utc_now

        if storage is not None:
            if store is not None:
                raise ValueError("Cannot mix 'storage' configuration with an explicit store")
            self.store = storage.build_store()
        elif store is not None:
            self.store = store
        else:
            raise ValueError("Must provide either 'storage' or 'store'")

        self.chunks = ChunkChain(self.store, self._settings, clock=self._clock)
        self.tree = TimeTree(self.store, self._settings)
        self.traversal = SpanTraversal(self.store, self.tree, self.chunks)

    @classmethod
    def from_store(
        cls,
        store: BackingStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> TimeIndex:
        """Create a TimeIndex on an explicit store."""
        return cls(store=store, settings=settings, clock=clock)

    @property
    def settings(self) -> Settings:
        return self._settings

    def close(self) -> None:
        self.store.close()

    # ------------------------------------------------------------------
    # Validation. Everything here runs before the store is touched.

    def _check_index(self, index: str) -> str:
        if not isinstance(index, str) or not index.strip():
            raise InvalidArgument("Index name must be a non-empty string")
        return index

    def _resolve_limit(self, limit: int | None) -> int:
        if limit is None:
            return self._settings.default_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise InvalidArgument(f"limit must be a positive integer, got {limit!r}")
        return limit

    def _check_link_tag(self, link_tag: str | None) -> str | None:
        if link_tag is not None and (not isinstance(link_tag, str) or not link_tag):
            raise InvalidArgument("Link tag must be a non-empty string")
        return link_tag

    def _check_content(self, content: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(content, Mapping):
            raise InvalidArgument("Entry content must be a mapping")
        try:
            json.dumps(content)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Entry content is not JSON serializable: {e}") from e
        return dict(content)

    def _check_span(
        self, index: str, from_: TimestampLike, until: TimestampLike, limit: int | None
    ) -> tuple[str, datetime, datetime, int]:
        return (
            self._check_index(index),
            parse_timestamp(from_),
            parse_timestamp(until),
            self._resolve_limit(limit),
        )

    def _coerce_chunk(self, chunk: ChunkLike) -> Chunk:
        if isinstance(chunk, Chunk):
            return chunk
        try:
            return Chunk.model_validate(chunk)
        except ValidationError as e:
            raise InvalidArgument(f"Malformed chunk: {e}") from e

    # ------------------------------------------------------------------
    # Writes

    def index_entry(
        self,
        index: str,
        content: Mapping[str, Any],
        created: TimestampLike | None = None,
        link_tag: str | None = None,
    ) -> Address:
        """Store an entry and hang it off the time tree of ``index``.

        Repeating the call with the same content and creation time is a
        no-op that returns the same address. Two different contents created
        at the same instant are two separate entries.

        Args:
            index: Name of the index to write into.
            content: JSON-serializable payload.
            created: Creation time. Defaults to now.
            link_tag: Optional label stored on the index link. Queries can
                filter on it.

        Returns:
            Address of the stored entry.
        """
        index = self._check_index(index)
        payload = self._check_content(content)
        link_tag = self._check_link_tag(link_tag)
        moment = parse_timestamp(created) if created is not None else self._clock()
        chunk = self.chunks.chunk_for(moment)

        address = self.store.put(Entry.record(payload, moment))
        leaf = self.tree.ensure_path(index, moment)
        self.store.link(leaf, address, entry_tag(moment, link_tag))
        self.store.link(address, leaf, f"{INDEXED_IN_TAG}{index}")
        # Flag the chunk last so traversals only reach it once the path exists
        self.chunks.materialize(chunk, self.tree.root_address(index))

        logger.debug("Indexed %s in %r at %s", address[:12], index, moment.isoformat())
        return address

    def remove_index(self, target: Address, index: str | None = None) -> int:
        """Revoke the index links pointing at ``target``.

        The entry itself stays in the store and can still be fetched with
        :meth:`get_entry`. Removing something that is not indexed is a no-op.

        Args:
            target: Address of the indexed entry.
            index: Only revoke the entry from this index. Defaults to every
                   index it was written into.

        Returns:
            Number of index links revoked.
        """
        if not isinstance(target, str) or not target:
            raise InvalidArgument("Target address must be a non-empty string")
        wanted = None if index is None else f"{INDEXED_IN_TAG}{self._check_index(index)}"

        revoked = 0
        for back_link in self.store.links_from(target, INDEXED_IN_TAG):
            if wanted is not None and back_link.tag != wanted:
                continue
            leaf = back_link.target
            for link in self.store.links_from(leaf, ENTRY_TAG):
                if link.target == target:
                    self.store.unlink(leaf, target, link.tag)
                    revoked += 1
            self.store.unlink(target, leaf, back_link.tag)

        logger.debug("Revoked %d index link(s) to %s", revoked, target[:12])
        return revoked

    # ------------------------------------------------------------------
    # Span queries

    def get_links_for_time_span(
        self,
        index: str,
        from_: TimestampLike,
        until: TimestampLike,
        limit: int | None = None,
        link_tag: str | None = None,
    ) -> list[Link]:
        """Index links with creation time between the bounds.

        Results are the ``limit`` links closest to ``from_``, ordered away
        from it. With ``link_tag``, only links indexed with that tag count.
        """
        index, start, end, limit = self._check_span(index, from_, until, limit)
        link_tag = self._check_link_tag(link_tag)
        return self.traversal.take_links(index, start, end, limit, link_tag)

    def get_addresses_between(
        self,
        index: str,
        from_: TimestampLike,
        until: TimestampLike,
        limit: int | None = None,
        link_tag: str | None = None,
    ) -> list[Address]:
        """Like :meth:`get_links_for_time_span` but returns entry addresses."""
        links = self.get_links_for_time_span(index, from_, until, limit, link_tag)
        return [link.target for link in links]

    def get_indexes_for_time_span(
        self,
        index: str,
        from_: TimestampLike,
        until: TimestampLike,
        limit: int | None = None,
        link_tag: str | None = None,
    ) -> list[Bucket]:
        """Non-empty leaf buckets between the bounds. ``limit`` counts buckets."""
        index, start, end, limit = self._check_span(index, from_, until, limit)
        link_tag = self._check_link_tag(link_tag)
        return self.traversal.take_buckets(index, start, end, limit, link_tag)

    def get_links_and_load_for_time_span(
        self,
        index: str,
        from_: TimestampLike,
        until: TimestampLike,
        limit: int | None = None,
        strict: bool = False,
        link_tag: str | None = None,
    ) -> list[Entry]:
        """Span query that also loads every linked entry, in traversal order.

        See :meth:`load_entries` for how missing entries are handled.
        """
        links = self.get_links_for_time_span(index, from_, until, limit, link_tag)
        return self.load_entries(links, strict=strict)

    def load_entries(self, links: list[Link], strict: bool = False) -> list[Entry]:
        """Load the entries behind ``links``, keeping their order.

        Links whose entry cannot be loaded are skipped and logged.

        Args:
            strict: Raise instead of skipping missing entries.

        Raises:
            PartialResult: In strict mode, when any entry was missing. The
                exception carries the entries that did load.
        """
        entries: list[Entry] = []
        missing: list[Address] = []
        for link in links:
            entry = self.get_entry(link.target)
            if entry is None:
                missing.append(link.target)
            else:
                entries.append(entry)

        if missing:
            if strict:
                raise PartialResult(
                    f"{len(missing)} of {len(links)} entries could not be loaded",
                    entries=entries,
                    missing=missing,
                )
            logger.warning(
                "Span query skipped %d missing entr%s: %s",
                len(missing),
                "y" if len(missing) == 1 else "ies",
                ", ".join(address[:12] for address in missing),
            )
        return entries

    # ------------------------------------------------------------------
    # Recency

    def get_most_recent_indexes(self, index: str, link_tag: str | None = None) -> Bucket | None:
        """The newest non-empty leaf bucket at or before now, or None."""
        index = self._check_index(index)
        link_tag = self._check_link_tag(link_tag)
        buckets = self.traversal.take_buckets(index, self._clock(), MIN_TIME, 1, link_tag)
        return buckets[0] if buckets else None

    def get_current_addresses(self, index: str, link_tag: str | None = None) -> list[Address]:
        """Entry addresses in the newest non-empty leaf bucket."""
        bucket = self.get_most_recent_indexes(index, link_tag)
        return bucket.targets if bucket is not None else []

    # ------------------------------------------------------------------
    # Entries

    def get_entry(self, address: Address) -> Entry | None:
        """Load an entry by address, indexed or not. None if absent."""
        record = self.store.get(address)
        if record is None or record.get("kind") != "entry":
            return None
        return Entry.from_record(address, record)

    # ------------------------------------------------------------------
    # Chunk chain

    def get_genesis_chunk(self) -> Chunk:
        return self.chunks.get_genesis_chunk()

    def get_latest_chunk(self) -> Chunk:
        return self.chunks.get_latest_chunk()

    def get_current_chunk(self) -> Chunk:
        return self.chunks.get_current_chunk()

    def get_previous_chunk(self, chunk: ChunkLike, hops: int = 1) -> Chunk:
        return self.chunks.get_previous_chunk(self._coerce_chunk(chunk), hops)

    def get_max_chunk_interval(self) -> timedelta:
        return self.chunks.get_max_chunk_interval()

    def materialized_chunks(self, index: str | None = None) -> list[Chunk]:
        """Chunks holding entries, for one index or across all of them."""
        if index is None:
            return self.chunks.materialized_chunks()
        return self.chunks.materialized_chunks(self.tree.root_address(self._check_index(index)))
