"""Domain models for ct_response: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.ct_common.enums import CollectionMode, CrashKind, ModeChangeTrigger

# respond() argument order; must match the detector's payload field order
RESPONSE_FIELDS: tuple[tuple[str, type], ...] = (
    ("reporter_tag", str),
    ("collection_id", str),
    ("current_price", int),
    ("baseline_price", int),
    ("crash_kind", int),
    ("detected_at", int),
    ("severity_bps", int),
)


@dataclass(frozen=True)
class CrashResponse:
    """The seven respond() arguments, as received (not yet validated)."""

    reporter_tag: str
    collection_id: str
    current_price: int
    baseline_price: int
    crash_kind: int
    detected_at: int
    severity_bps: int


@dataclass(frozen=True)
class CrashRecord:
    seq: int                 # monotonic, assigned by the store
    collection_id: str
    detected_at: int
    current_price: int
    baseline_price: int
    crash_kind: CrashKind
    severity_bps: int
    reporter_tag: str
    reporter: str            # caller identity that submitted the response
    recorded_at: datetime | None = None


@dataclass
class CollectionStatus:
    collection_id: str
    emergency_mode: bool = False
    last_crash_at: int = 0
    last_crash_price: int = 0
    crash_count: int = 0

    @property
    def mode(self) -> CollectionMode:
        return CollectionMode.EMERGENCY if self.emergency_mode else CollectionMode.NORMAL


@dataclass(frozen=True)
class EmergencyEvent:
    id: int
    collection_id: str
    emergency_mode: bool
    trigger: ModeChangeTrigger
    reason: str
    actor: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class DetectorAuthorization:
    identity: str
    authorized: bool
    updated_by: str
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CollectionStats:
    collection_id: str
    mode: CollectionMode
    last_crash_at: int
    last_crash_price: int
    crash_count: int
    total_crashes: int       # global counter across all collections
    healthy: bool


@dataclass(frozen=True)
class RespondOutcome:
    record: CrashRecord
    status: CollectionStatus
    escalated: bool          # True only on a NORMAL -> EMERGENCY transition
