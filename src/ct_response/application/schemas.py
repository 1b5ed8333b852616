"""Pydantic schemas for ct_response API requests/responses.

RespondRequest fields are plain str/int. Range and format checks run in the
ledger, after the caller has been checked against the authorization table.
"""

from pydantic import BaseModel

from src.ct_response.domain.models import (
    CollectionStats,
    CollectionStatus,
    CrashRecord,
    CrashResponse,
    RespondOutcome,
)


class RespondRequest(BaseModel):
    reporter_tag: str
    collection_id: str
    current_price: int
    baseline_price: int
    crash_kind: int
    detected_at: int
    severity_bps: int

    def to_domain(self) -> CrashResponse:
        return CrashResponse(**self.model_dump())


class CrashRecordOut(BaseModel):
    seq: int
    collection_id: str
    detected_at: int
    current_price: str
    baseline_price: str
    crash_kind: int
    crash_kind_name: str
    severity_bps: int
    reporter_tag: str
    reporter: str
    recorded_at: str | None

    @classmethod
    def from_domain(cls, r: CrashRecord) -> "CrashRecordOut":
        return cls(
            seq=r.seq,
            collection_id=r.collection_id,
            detected_at=r.detected_at,
            current_price=str(r.current_price),
            baseline_price=str(r.baseline_price),
            crash_kind=int(r.crash_kind),
            crash_kind_name=r.crash_kind.name,
            severity_bps=r.severity_bps,
            reporter_tag=r.reporter_tag,
            reporter=r.reporter,
            recorded_at=r.recorded_at.isoformat() if r.recorded_at else None,
        )


class CollectionStatusOut(BaseModel):
    collection_id: str
    mode: str
    emergency_mode: bool
    last_crash_at: int
    last_crash_price: str
    crash_count: int

    @classmethod
    def from_domain(cls, s: CollectionStatus) -> "CollectionStatusOut":
        return cls(
            collection_id=s.collection_id,
            mode=s.mode.value,
            emergency_mode=s.emergency_mode,
            last_crash_at=s.last_crash_at,
            last_crash_price=str(s.last_crash_price),
            crash_count=s.crash_count,
        )


class RespondResponse(BaseModel):
    record: CrashRecordOut
    status: CollectionStatusOut
    escalated: bool

    @classmethod
    def from_domain(cls, o: RespondOutcome) -> "RespondResponse":
        return cls(
            record=CrashRecordOut.from_domain(o.record),
            status=CollectionStatusOut.from_domain(o.status),
            escalated=o.escalated,
        )


class CrashListResponse(BaseModel):
    items: list[CrashRecordOut]


class HealthOut(BaseModel):
    collection_id: str
    healthy: bool


class CollectionStatsOut(BaseModel):
    collection_id: str
    mode: str
    last_crash_at: int
    last_crash_price: str
    crash_count: int
    total_crashes: int
    healthy: bool

    @classmethod
    def from_domain(cls, s: CollectionStats) -> "CollectionStatsOut":
        return cls(
            collection_id=s.collection_id,
            mode=s.mode.value,
            last_crash_at=s.last_crash_at,
            last_crash_price=str(s.last_crash_price),
            crash_count=s.crash_count,
            total_crashes=s.total_crashes,
            healthy=s.healthy,
        )
