# src/chronicle/errors.py
"""Exceptions raised by the time index."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chronicle.models import Entry


class ChronicleError(Exception):
    """Base class for all time index errors."""


class InvalidArgument(ChronicleError, ValueError):
    """Raised before any store access when a request is malformed.

    Covers empty index names, non-positive limits, malformed timestamps and
    chunks that do not line up with the configured chunk interval.
    """


class NotFound(ChronicleError, LookupError):
    """Raised when a required structure does not exist yet.

    The only structural lookup that can fail this way is the chunk chain
    before anything has ever been indexed.
    """


class StoreUnavailable(ChronicleError):
    """Raised when the backing store cannot serve a request right now.

    This is distinct from a missing entry. Callers are expected to retry the
    whole operation; every operation is safe to repeat.
    """


class PartialResult(ChronicleError):
    """Raised by strict loading traversals that could not dereference links.

    Attributes:
        entries: Entries that were loaded, in traversal order.
        missing: Addresses that could not be loaded.
    """

    def __init__(
        self,
        message: str,
        entries: list[Entry],
        missing: list[str],
    ) -> None:
        super().__init__(message)
        self.entries = entries
        self.missing = missing
