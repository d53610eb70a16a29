# src/chronicle/models/chunk.py
"""Chunk data model."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chronicle.addressing import content_address
from chronicle.timestamps import parse_timestamp, split_timestamp


class Chunk(BaseModel):
    """A fixed-width, half-open window of time ``[from, until)``.

    The address depends only on the window bounds, so every writer that
    computes the chunk for the same wall-clock window agrees on it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: datetime = Field(alias="from")
    until: datetime

    @field_validator("from_", "until")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return parse_timestamp(value)

    @property
    def width(self) -> timedelta:
        return self.until - self.from_

    def contains(self, moment: datetime) -> bool:
        return self.from_ <= moment < self.until

    def shifted(self, steps: int) -> Chunk:
        """Return the chunk ``steps`` widths later (negative moves back)."""
        offset = self.width * steps
        return Chunk(from_=self.from_ + offset, until=self.until + offset)

    def record(self) -> dict[str, Any]:
        return {
            "kind": "chunk",
            "from": split_timestamp(self.from_)[0],
            "until": split_timestamp(self.until)[0],
        }

    @property
    def address(self) -> str:
        return content_address(self.record())
