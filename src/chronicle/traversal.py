# src/chronicle/traversal.py
"""Range traversal over the time tree.

The backing store cannot sort or range-scan, so span queries are answered
by a depth-first walk over calendar coordinates:

1. Order is chosen by the bounds: ``from > until`` walks newest first,
   otherwise oldest first.
2. Materialized chunks of the index that overlap the span are visited in
   that order.
3. Inside each chunk the tree is descended from the index root, only
   entering children whose time window intersects the chunk window
   clipped to the span, newest or oldest child first.
4. At a leaf, entry links whose timestamp lies in the clipped window are
   emitted, sorted by ``(created, target)``.

The walk is a generator, so callers that stop after ``limit`` results
never touch the rest of the tree. Results are always the ones closest to
the starting bound.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from itertools import islice
from typing import Protocol, runtime_checkable

from chronicle.addressing import Address
from chronicle.chunks import ChunkChain
from chronicle.models import CHILD_TAG, ENTRY_TAG, Bucket, Link
from chronicle.stores.base import BackingStore
from chronicle.tree import TimePath, TimeTree, window_for

logger = logging.getLogger(__name__)

# Chunks are half-open; spans are closed
_RESOLUTION = timedelta(microseconds=1)


@runtime_checkable
class TreeCursor(Protocol):
    """Read access to the time tree needed by the traversal."""

    def children(self, node: Address) -> list[tuple[int, Address]]:
        """Child ``(coordinate, address)`` pairs in ascending coordinate order."""
        ...

    def leaf_links(self, node: Address, link_tag: str | None = None) -> list[Link]:
        """Live entry links hanging from a leaf, optionally only those with ``link_tag``."""
        ...


class StoreTreeCursor:
    """TreeCursor over a BackingStore, memoized for one traversal."""

    def __init__(self, store: BackingStore) -> None:
        self.store = store
        self._children: dict[Address, list[tuple[int, Address]]] = {}
        self._leaves: dict[Address, list[Link]] = {}

    def children(self, node: Address) -> list[tuple[int, Address]]:
        if node not in self._children:
            links = self.store.links_from(node, CHILD_TAG)
            self._children[node] = sorted((int(link.suffix), link.target) for link in links)
        return self._children[node]

    def leaf_links(self, node: Address, link_tag: str | None = None) -> list[Link]:
        if node not in self._leaves:
            self._leaves[node] = list(self.store.links_from(node, ENTRY_TAG))
        if link_tag is None:
            return self._leaves[node]
        return [link for link in self._leaves[node] if link.link_tag == link_tag]


@dataclass(frozen=True)
class Span:
    """Closed time range plus the direction it should be walked in."""

    start: datetime
    end: datetime
    descending: bool

    @classmethod
    def between(cls, from_: datetime, until: datetime) -> Span:
        if from_ > until:
            return cls(start=until, end=from_, descending=True)
        return cls(start=from_, end=until, descending=False)


class SpanTraversal:
    """Depth-first, chunk-aware span walker."""

    def __init__(self, store: BackingStore, tree: TimeTree, chunks: ChunkChain) -> None:
        self.store = store
        self.tree = tree
        self.chunks = chunks

    def cursor(self) -> TreeCursor:
        return StoreTreeCursor(self.store)
    def buckets(
        self,
        index: str,
        from_: datetime,
        until: datetime,
        link_tag: str | None = None,
    ) -> Iterator[Bucket]:
        """Yield non-empty leaf buckets between the bounds in the requested order.

        With ``link_tag``, only index links written with that tag count.
        """
        span = Span.between(from_, until)
        cursor = self.cursor()
        root = self.tree.root_address(index)
        chunks = self.chunks.chunks_between(root, span.start, span.end, span.descending)
        logger.debug(
            "Traversing %r from %s to %s across %d chunk(s)",
            index,
            from_.isoformat(),
            until.isoformat(),
            len(chunks),
        )

        pending: Bucket | None = None
        for chunk in chunks:
            lo = max(span.start, chunk.from_)
            hi = min(span.end, chunk.until - _RESOLUTION)
            for bucket in self._descend(cursor, root, (), lo, hi, span.descending, link_tag):
                # A leaf wider than a chunk shows up once per chunk; join the pieces
                if pending is not None and pending.address == bucket.address:
                    pending.links.extend(bucket.links)
                    continue
                if pending is not None:
                    yield pending
                pending = bucket
        if pending is not None:
            yield pending

    def links(
        self,
        index: str,
        from_: datetime,
        until: datetime,
        link_tag: str | None = None,
    ) -> Iterator[Link]:
        """Yield entry links between the bounds in the requested order."""
        for bucket in self.buckets(index, from_, until, link_tag):
            yield from bucket.links

    def take_links(
        self,
        index: str,
        from_: datetime,
        until: datetime,
        limit: int,
        link_tag: str | None = None,
    ) -> list[Link]:
        return list(islice(self.links(index, from_, until, link_tag), limit))

    def take_buckets(
        self,
        index: str,
        from_: datetime,
        until: datetime,
        limit: int,
        link_tag: str | None = None,
    ) -> list[Bucket]:
        return list(islice(self.buckets(index, from_, until, link_tag), limit))

    def _descend(
        self,
        cursor: TreeCursor,
        node: Address,
        path: TimePath,
        lo: datetime,
        hi: datetime,
        descending: bool,
        link_tag: str | None,
    ) -> Iterator[Bucket]:
        if len(path) == self.tree.depth:
            found: list[tuple[datetime, Link]] = []
            for link in cursor.leaf_links(node, link_tag):
                created = link.created
                if created is not None and lo <= created <= hi:
                    found.append((created, link))
            if found:
                found.sort(
                    key=lambda pair: (pair[0], pair[1].target, pair[1].tag), reverse=descending
                )
                start, end = window_for(path)
                links = [link for _, link in found]
                yield Bucket(address=node, from_=start, until=end, links=links)
            return

        children = cursor.children(node)
        for coordinate, child in reversed(children) if descending else children:
            child_path = (*path, coordinate)
            start, end = window_for(child_path)
            if start > hi or end <= lo:
                continue
            yield from self._descend(cursor, child, child_path, lo, hi, descending, link_tag)
