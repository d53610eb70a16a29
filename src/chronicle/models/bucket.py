# src/chronicle/models/bucket.py
"""Bucket data model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chronicle.models.link import Link


class Bucket(BaseModel):
    """One leaf of the time tree together with the links found in it.

    Attributes:
        address: Address of the leaf node
        from_: Start of the time unit the leaf covers (serialized as ``from``)
        until: End of that time unit (exclusive)
        links: Entry links in traversal order
    """

    model_config = ConfigDict(populate_by_name=True)

    address: str
    from_: datetime = Field(alias="from")
    until: datetime
    links: list[Link] = Field(default_factory=list)

    @property
    def targets(self) -> list[str]:
        return [link.target for link in self.links]
