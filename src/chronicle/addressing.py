# src/chronicle/addressing.py
"""Deterministic content addressing.

Every structural record (chunks, tree nodes, anchors) and every entry is
addressed by hashing its canonical JSON form. Two processes that build the
same record independently always arrive at the same address, which is what
lets concurrent writers converge without coordinating.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

Address = str


def canonical_json(content: Mapping[str, Any]) -> str:
    """Serialize content with sorted keys and no insignificant whitespace."""
    return json.dumps(content, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def content_address(content: Mapping[str, Any]) -> Address:
    """Return the SHA-256 hex digest of the canonical JSON of ``content``."""
    return hashlib.sha256(canonical_json(content).encode("utf-8")).hexdigest()


def anchor_record(name: str) -> dict[str, str]:
    """Record for a named anchor, a fixed address links can hang from."""
    return {"kind": "anchor", "name": name}
