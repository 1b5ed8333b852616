"""Test factories: window builders and an in-memory ledger store."""

from dataclasses import replace
from datetime import UTC, datetime

from src.ct_collector.domain.models import Snapshot
from src.ct_common.enums import CrashKind, ModeChangeTrigger
from src.ct_response.domain.models import (
    CollectionStatus,
    CrashRecord,
    CrashResponse,
    DetectorAuthorization,
    EmergencyEvent,
)

ETH = 10**18
COLLECTION = "0xbc4ca0eda7647a8ab7c2061c2e118a18a936f13d"
OWNER = "0x0000000000000000000000000000000000000001"
DETECTOR = "0x00000000000000000000000000000000000000d1"
T0 = 1_700_000_000


def make_window(
    prices: list[int],
    step: int = 60,
    newest_at: int = T0,
    collection_id: str = COLLECTION,
    tag: str = "floor-crash-trap",
) -> list[Snapshot]:
    """Newest-first snapshots spaced `step` seconds apart."""
    return [
        Snapshot(1, p, newest_at - step * i, collection_id, tag)
        for i, p in enumerate(prices)
    ]


class FakeLedgerRepository:
    """In-memory LedgerRepositoryProtocol; `db` arguments are ignored."""

    def __init__(self) -> None:
        self.authorizations: dict[str, DetectorAuthorization] = {}
        self.statuses: dict[str, CollectionStatus] = {}
        self.crashes: list[CrashRecord] = []
        self.events: list[EmergencyEvent] = []
        self.locked: list[str] = []

    async def is_authorized(self, db, identity: str) -> bool:
        auth = self.authorizations.get(identity)
        return bool(auth and auth.authorized)

    async def set_authorization(self, db, identity, authorized, updated_by):
        auth = DetectorAuthorization(identity, authorized, updated_by, datetime.now(UTC))
        self.authorizations[identity] = auth
        return auth

    async def list_authorizations(self, db):
        return [self.authorizations[k] for k in sorted(self.authorizations)]

    async def get_status(self, db, collection_id):
        status = self.statuses.get(collection_id)
        return replace(status) if status else None

    async def lock_status(self, db, collection_id):
        self.locked.append(collection_id)
        if collection_id not in self.statuses:
            self.statuses[collection_id] = CollectionStatus(collection_id=collection_id)
        return replace(self.statuses[collection_id])

    async def save_status(self, db, status):
        self.statuses[status.collection_id] = replace(status)

    async def append_crash(self, db, response: CrashResponse, reporter: str) -> CrashRecord:
        record = CrashRecord(
            seq=len(self.crashes) + 1,
            collection_id=response.collection_id,
            detected_at=response.detected_at,
            current_price=response.current_price,
            baseline_price=response.baseline_price,
            crash_kind=CrashKind(response.crash_kind),
            severity_bps=response.severity_bps,
            reporter_tag=response.reporter_tag,
            reporter=reporter,
            recorded_at=datetime.now(UTC),
        )
        self.crashes.append(record)
        return record

    async def list_recent_crashes(self, db, limit, collection_id):
        rows = [
            r for r in reversed(self.crashes)
            if collection_id is None or r.collection_id == collection_id
        ]
        return rows[:limit]

    async def count_crashes(self, db):
        return len(self.crashes)

    async def append_emergency_event(
        self, db, collection_id, emergency_mode, trigger: ModeChangeTrigger, reason, actor
    ):
        event = EmergencyEvent(
            len(self.events) + 1, collection_id, emergency_mode, trigger, reason, actor,
            datetime.now(UTC),
        )
        self.events.append(event)
        return event

    async def list_emergency_events(self, db, collection_id, limit):
        return [e for e in reversed(self.events) if e.collection_id == collection_id][:limit]
