"""LedgerRepository: concrete implementation of LedgerRepositoryProtocol.

All queries use raw text() SQL (no ORM). Prices are NUMERIC(78,0) (uint256);
asyncpg hands them back as Decimal, so row mappers convert to int.
crash_records is append-only: the table rejects UPDATE/DELETE by trigger.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ct_common.enums import CrashKind, ModeChangeTrigger
from src.ct_response.domain.models import (
    CollectionStatus,
    CrashRecord,
    CrashResponse,
    DetectorAuthorization,
    EmergencyEvent,
)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_IS_AUTHORIZED_SQL = text("""
    SELECT authorized FROM detector_authorizations WHERE identity = :identity
""")

_UPSERT_AUTHORIZATION_SQL = text("""
    INSERT INTO detector_authorizations (identity, authorized, updated_by)
    VALUES (:identity, :authorized, :updated_by)
    ON CONFLICT (identity) DO UPDATE
    SET authorized = EXCLUDED.authorized,
        updated_by = EXCLUDED.updated_by,
        updated_at = NOW()
    RETURNING identity, authorized, updated_by, updated_at
""")

_LIST_AUTHORIZATIONS_SQL = text("""
    SELECT identity, authorized, updated_by, updated_at
    FROM detector_authorizations
    ORDER BY identity
""")

_GET_STATUS_SQL = text("""
    SELECT collection_id, emergency_mode, last_crash_at, last_crash_price, crash_count
    FROM collection_status
    WHERE collection_id = :collection_id
""")

_ENSURE_STATUS_SQL = text("""
    INSERT INTO collection_status (collection_id)
    VALUES (:collection_id)
    ON CONFLICT (collection_id) DO NOTHING
""")

_LOCK_STATUS_SQL = text("""
    SELECT collection_id, emergency_mode, last_crash_at, last_crash_price, crash_count
    FROM collection_status
    WHERE collection_id = :collection_id
    FOR UPDATE
""")

_UPSERT_STATUS_SQL = text("""
    INSERT INTO collection_status
        (collection_id, emergency_mode, last_crash_at, last_crash_price, crash_count)
    VALUES (:collection_id, :emergency_mode, :last_crash_at, :last_crash_price, :crash_count)
    ON CONFLICT (collection_id) DO UPDATE
    SET emergency_mode   = EXCLUDED.emergency_mode,
        last_crash_at    = EXCLUDED.last_crash_at,
        last_crash_price = EXCLUDED.last_crash_price,
        crash_count      = EXCLUDED.crash_count
""")

_INSERT_CRASH_SQL = text("""
    INSERT INTO crash_records
        (collection_id, detected_at, current_price, baseline_price,
         crash_kind, severity_bps, reporter_tag, reporter)
    VALUES (:collection_id, :detected_at, :current_price, :baseline_price,
            :crash_kind, :severity_bps, :reporter_tag, :reporter)
    RETURNING seq, recorded_at
""")

_LIST_CRASHES_SQL = text("""
    SELECT seq, collection_id, detected_at, current_price, baseline_price,
           crash_kind, severity_bps, reporter_tag, reporter, recorded_at
    FROM crash_records
    WHERE CAST(:collection_id AS TEXT) IS NULL
       OR collection_id = CAST(:collection_id AS TEXT)
    ORDER BY seq DESC
    LIMIT :limit
""")

_COUNT_CRASHES_SQL = text("SELECT COUNT(*) FROM crash_records")

_INSERT_EVENT_SQL = text("""
    INSERT INTO emergency_mode_events
        (collection_id, emergency_mode, trigger, reason, actor)
    VALUES (:collection_id, :emergency_mode, :trigger, :reason, :actor)
    RETURNING id, created_at
""")

_LIST_EVENTS_SQL = text("""
    SELECT id, collection_id, emergency_mode, trigger, reason, actor, created_at
    FROM emergency_mode_events
    WHERE collection_id = :collection_id
    ORDER BY id DESC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_authorization(row: object) -> DetectorAuthorization:
    return DetectorAuthorization(
        identity=row.identity,  # type: ignore[attr-defined]
        authorized=row.authorized,  # type: ignore[attr-defined]
        updated_by=row.updated_by,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_status(row: object) -> CollectionStatus:
    return CollectionStatus(
        collection_id=row.collection_id,  # type: ignore[attr-defined]
        emergency_mode=row.emergency_mode,  # type: ignore[attr-defined]
        last_crash_at=int(row.last_crash_at),  # type: ignore[attr-defined]
        last_crash_price=int(row.last_crash_price),  # type: ignore[attr-defined]
        crash_count=int(row.crash_count),  # type: ignore[attr-defined]
    )


def _row_to_crash(row: object) -> CrashRecord:
    return CrashRecord(
        seq=row.seq,  # type: ignore[attr-defined]
        collection_id=row.collection_id,  # type: ignore[attr-defined]
        detected_at=int(row.detected_at),  # type: ignore[attr-defined]
        current_price=int(row.current_price),  # type: ignore[attr-defined]
        baseline_price=int(row.baseline_price),  # type: ignore[attr-defined]
        crash_kind=CrashKind(row.crash_kind),  # type: ignore[attr-defined]
        severity_bps=int(row.severity_bps),  # type: ignore[attr-defined]
        reporter_tag=row.reporter_tag,  # type: ignore[attr-defined]
        reporter=row.reporter,  # type: ignore[attr-defined]
        recorded_at=row.recorded_at,  # type: ignore[attr-defined]
    )


def _row_to_event(row: object) -> EmergencyEvent:
    return EmergencyEvent(
        id=row.id,  # type: ignore[attr-defined]
        collection_id=row.collection_id,  # type: ignore[attr-defined]
        emergency_mode=row.emergency_mode,  # type: ignore[attr-defined]
        trigger=ModeChangeTrigger(row.trigger),  # type: ignore[attr-defined]
        reason=row.reason,  # type: ignore[attr-defined]
        actor=row.actor,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class LedgerRepository:
    """Concrete repository. Writes join the caller's transaction."""

    async def is_authorized(self, db: AsyncSession, identity: str) -> bool:
        result = await db.execute(_IS_AUTHORIZED_SQL, {"identity": identity})
        return bool(result.scalar_one_or_none())

    async def set_authorization(
        self, db: AsyncSession, identity: str, authorized: bool, updated_by: str
    ) -> DetectorAuthorization:
        result = await db.execute(
            _UPSERT_AUTHORIZATION_SQL,
            {"identity": identity, "authorized": authorized, "updated_by": updated_by},
        )
        return _row_to_authorization(result.fetchone())

    async def list_authorizations(self, db: AsyncSession) -> list[DetectorAuthorization]:
        result = await db.execute(_LIST_AUTHORIZATIONS_SQL)
        return [_row_to_authorization(row) for row in result.fetchall()]

    async def get_status(
        self, db: AsyncSession, collection_id: str
    ) -> CollectionStatus | None:
        result = await db.execute(_GET_STATUS_SQL, {"collection_id": collection_id})
        row = result.fetchone()
        return _row_to_status(row) if row else None

    async def lock_status(self, db: AsyncSession, collection_id: str) -> CollectionStatus:
        """Create the row if missing, then hold its lock until the transaction ends."""
        await db.execute(_ENSURE_STATUS_SQL, {"collection_id": collection_id})
        result = await db.execute(_LOCK_STATUS_SQL, {"collection_id": collection_id})
        return _row_to_status(result.fetchone())

    async def save_status(self, db: AsyncSession, status: CollectionStatus) -> None:
        await db.execute(
            _UPSERT_STATUS_SQL,
            {
                "collection_id": status.collection_id,
                "emergency_mode": status.emergency_mode,
                "last_crash_at": status.last_crash_at,
                "last_crash_price": status.last_crash_price,
                "crash_count": status.crash_count,
            },
        )

    async def append_crash(
        self, db: AsyncSession, response: CrashResponse, reporter: str
    ) -> CrashRecord:
        result = await db.execute(
            _INSERT_CRASH_SQL,
            {
                "collection_id": response.collection_id,
                "detected_at": response.detected_at,
                "current_price": response.current_price,
                "baseline_price": response.baseline_price,
                "crash_kind": response.crash_kind,
                "severity_bps": response.severity_bps,
                "reporter_tag": response.reporter_tag,
                "reporter": reporter,
            },
        )
        row = result.fetchone()
        return CrashRecord(
            seq=row.seq,  # type: ignore[union-attr]
            collection_id=response.collection_id,
            detected_at=response.detected_at,
            current_price=response.current_price,
            baseline_price=response.baseline_price,
            crash_kind=CrashKind(response.crash_kind),
            severity_bps=response.severity_bps,
            reporter_tag=response.reporter_tag,
            reporter=reporter,
            recorded_at=row.recorded_at,  # type: ignore[union-attr]
        )

    async def list_recent_crashes(
        self, db: AsyncSession, limit: int, collection_id: str | None
    ) -> list[CrashRecord]:
        result = await db.execute(
            _LIST_CRASHES_SQL, {"collection_id": collection_id, "limit": limit}
        )
        return [_row_to_crash(row) for row in result.fetchall()]

    async def count_crashes(self, db: AsyncSession) -> int:
        result = await db.execute(_COUNT_CRASHES_SQL)
        return int(result.scalar_one())

    async def append_emergency_event(
        self,
        db: AsyncSession,
        collection_id: str,
        emergency_mode: bool,
        trigger: ModeChangeTrigger,
        reason: str,
        actor: str,
    ) -> EmergencyEvent:
        result = await db.execute(
            _INSERT_EVENT_SQL,
            {
                "collection_id": collection_id,
                "emergency_mode": emergency_mode,
                "trigger": trigger.value,
                "reason": reason,
                "actor": actor,
            },
        )
        row = result.fetchone()
        return EmergencyEvent(
            id=row.id,  # type: ignore[union-attr]
            collection_id=collection_id,
            emergency_mode=emergency_mode,
            trigger=trigger,
            reason=reason,
            actor=actor,
            created_at=row.created_at,  # type: ignore[union-attr]
        )

    async def list_emergency_events(
        self, db: AsyncSession, collection_id: str, limit: int
    ) -> list[EmergencyEvent]:
        result = await db.execute(
            _LIST_EVENTS_SQL, {"collection_id": collection_id, "limit": limit}
        )
        return [_row_to_event(row) for row in result.fetchall()]
