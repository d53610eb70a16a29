"""Chronicle - hierarchical time index.

Index arbitrary records by creation time on top of a store that only knows
content-addressed entries and tagged links, then read them back by recency
or by time span in either direction.

Quick Start (Local Storage):
    from chronicle import LocalStorage, TimeIndex

    index = TimeIndex(storage=LocalStorage("./data"))
    address = index.index_entry("events", {"kind": "login"}, "2024-03-17T14:02:07Z")

    # Newest first: the later bound goes first
    links = index.get_links_for_time_span(
        "events", "2024-03-18T00:00:00Z", "2024-03-01T00:00:00Z", limit=20
    )

Explicit Store:
    from chronicle import Settings, TimeIndex
    from chronicle.stores import MemoryStore

    index = TimeIndex.from_store(MemoryStore(), settings=Settings.with_preset("fine"))
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("chronicle-index")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"

from chronicle.configuration import LocalStorage, MemoryStorage, StorageConfig
from chronicle.errors import (
    ChronicleError,
    InvalidArgument,
    NotFound,
    PartialResult,
    StoreUnavailable,
)
from chronicle.index import TimeIndex
from chronicle.models import Bucket, Chunk, Entry, Link
from chronicle.settings import Settings
from chronicle.stores import BackingStore, MemoryStore, SQLiteStore

__all__ = [
    # Version
    "__version__",
    # Main class
    "TimeIndex",
    # Configuration
    "Settings",
    "StorageConfig",
    "LocalStorage",
    "MemoryStorage",
    # Models
    "Bucket",
    "Chunk",
    "Entry",
    "Link",
    # Stores
    "BackingStore",
    "MemoryStore",
    "SQLiteStore",
    # Errors
    "ChronicleError",
    "InvalidArgument",
    "NotFound",
    "PartialResult",
    "StoreUnavailable",
]
