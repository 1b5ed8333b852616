"""Response payload handed to the host network when a crash is detected.

Wire order: [reporterTag, collectionId, currentPrice, baselinePrice,
crashKind, detectedAt, severityBps]. The ledger's respond() takes the same
seven fields in the same order; see check_payload_compatibility.
"""

from dataclasses import dataclass

from src.ct_collector.domain.models import Snapshot
from src.ct_common.codec import decode_tuple, encode_tuple
from src.ct_detector.domain.models import CrashVerdict

PAYLOAD_FIELDS: tuple[tuple[str, type], ...] = (
    ("reporter_tag", str),
    ("collection_id", str),
    ("current_price", int),
    ("baseline_price", int),
    ("crash_kind", int),
    ("detected_at", int),
    ("severity_bps", int),
)


@dataclass(frozen=True)
class CrashPayload:
    reporter_tag: str
    collection_id: str
    current_price: int
    baseline_price: int   # oldest price in the window
    crash_kind: int
    detected_at: int      # newest snapshot's observed_at
    severity_bps: int

    @classmethod
    def from_verdict(cls, window: list[Snapshot], verdict: CrashVerdict) -> "CrashPayload":
        newest, oldest = window[0], window[-1]
        return cls(
            reporter_tag=newest.reporter_tag,
            collection_id=newest.collection_id,
            current_price=newest.price,
            baseline_price=oldest.price,
            crash_kind=int(verdict.kind),
            detected_at=newest.observed_at,
            severity_bps=verdict.severity_bps,
        )

    def to_tuple(self) -> tuple[str, str, int, int, int, int, int]:
        return (
            self.reporter_tag,
            self.collection_id,
            self.current_price,
            self.baseline_price,
            self.crash_kind,
            self.detected_at,
            self.severity_bps,
        )

    def encode(self) -> bytes:
        return encode_tuple(self.to_tuple())

    @classmethod
    def decode(cls, data: bytes) -> "CrashPayload":
        values = decode_tuple(data, [t for _, t in PAYLOAD_FIELDS])
        return cls(**dict(zip([name for name, _ in PAYLOAD_FIELDS], values)))  # type: ignore[arg-type]
