# src/chronicle/models/entry.py
"""Entry data model."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from chronicle.timestamps import format_timestamp, parse_tag_timestamp


class Entry(BaseModel):
    """A caller payload stored once in the backing store."""

    address: str
    content: dict[str, Any] = Field(default_factory=dict)
    created: datetime

    @staticmethod
    def record(content: Mapping[str, Any], created: datetime) -> dict[str, Any]:
        """Store representation; identical content and time give one address."""
        return {"kind": "entry", "content": dict(content), "created": format_timestamp(created)}

    @classmethod
    def from_record(cls, address: str, record: Mapping[str, Any]) -> Entry:
        return cls(
            address=address,
            content=record.get("content", {}),
            created=parse_tag_timestamp(record["created"]),
        )
