"""Pydantic schemas for ct_detector API requests/responses."""

from pydantic import BaseModel, Field

from src.ct_common.enums import CrashKind
from src.ct_detector.domain.payload import CrashPayload


class ShouldRespondRequest(BaseModel):
    """Encoded snapshots, newest first, each a 0x-prefixed hex string."""

    snapshots: list[str] = Field(..., max_length=1000)


class CrashPayloadOut(BaseModel):
    reporter_tag: str
    collection_id: str
    current_price: str
    baseline_price: str
    crash_kind: int
    crash_kind_name: str
    detected_at: int
    severity_bps: int

    @classmethod
    def from_domain(cls, p: CrashPayload) -> "CrashPayloadOut":
        return cls(
            reporter_tag=p.reporter_tag,
            collection_id=p.collection_id,
            current_price=str(p.current_price),
            baseline_price=str(p.baseline_price),
            crash_kind=p.crash_kind,
            crash_kind_name=CrashKind(p.crash_kind).name,
            detected_at=p.detected_at,
            severity_bps=p.severity_bps,
        )


class ShouldRespondResponse(BaseModel):
    triggered: bool
    payload: str               # 0x hex, "0x" when not triggered
    response: CrashPayloadOut | None
