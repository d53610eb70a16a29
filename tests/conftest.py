"""Shared pytest fixtures."""

import os
import tempfile
from datetime import UTC, datetime

import pytest

from chronicle.index import TimeIndex
from chronicle.settings import Settings
from chronicle.stores import MemoryStore

# Fixed "now" for recency tests
NOW = datetime(2024, 3, 17, 14, 2, 7, 500000, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep CHRONICLE_* env vars and stray config files out of every test."""
    for key in list(os.environ):
        if key.startswith("CHRONICLE_"):
            monkeypatch.delenv(key)
    with tempfile.TemporaryDirectory() as workdir:
        monkeypatch.chdir(workdir)
        yield workdir


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def time_index(store, settings, clock):
    """TimeIndex on an in-memory store with the clock pinned to NOW."""
    return TimeIndex.from_store(store, settings=settings, clock=clock)
