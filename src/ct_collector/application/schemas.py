"""Pydantic schemas for ct_collector API responses.

Prices are serialized as decimal strings: uint256 values do not fit in a
JSON number on most clients.
"""

from pydantic import BaseModel

from src.ct_collector.domain.models import Snapshot
from src.ct_common.codec import to_hex


class SnapshotOut(BaseModel):
    schema_version: int
    price: str
    observed_at: int
    collection_id: str
    reporter_tag: str

    @classmethod
    def from_domain(cls, s: Snapshot) -> "SnapshotOut":
        return cls(
            schema_version=s.schema_version,
            price=str(s.price),
            observed_at=s.observed_at,
            collection_id=s.collection_id,
            reporter_tag=s.reporter_tag,
        )


class CollectResponse(BaseModel):
    snapshot: SnapshotOut
    encoded: str

    @classmethod
    def from_domain(cls, s: Snapshot) -> "CollectResponse":
        return cls(snapshot=SnapshotOut.from_domain(s), encoded=to_hex(s.encode()))
