"""ResponseLedgerService: authorization, crash bookkeeping, emergency mode.

Per-collection state machine:

    NORMAL --(accepted response meeting an escalation rule)--> EMERGENCY
    EMERGENCY --(owner override only)--> NORMAL

Every mutating method validates fully before its first write, and the router
wraps each call in one transaction, so a rejected call changes nothing.
Status reads on the write path lock the collection row, so concurrent
responses for one collection apply one after another.
"""

import logging
from collections.abc import Callable
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ct_common.datetime_utils import unix_now
from src.ct_common.enums import CollectionMode, CrashKind, ModeChangeTrigger
from src.ct_common.errors import InvalidInputError, NotOwnerError, UnauthorizedError
from src.ct_response.domain.constants import (
    HEALTH_SILENCE_WINDOW_SECONDS,
    RECENT_HISTORY_CAP,
)
from src.ct_response.domain.escalation import should_escalate
from src.ct_response.domain.models import (
    CollectionStats,
    CollectionStatus,
    CrashRecord,
    CrashResponse,
    DetectorAuthorization,
    EmergencyEvent,
    RespondOutcome,
)
from src.ct_response.domain.repository import LedgerRepositoryProtocol
from src.ct_response.domain.validation import (
    check_collection_id,
    check_crash_response,
    check_identity,
)
from src.ct_response.infrastructure.persistence import LedgerRepository

logger = logging.getLogger(__name__)


class ResponseLedgerService:
    def __init__(
        self,
        repo: LedgerRepositoryProtocol | None = None,
        owner_id: str | None = None,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        self._repo: LedgerRepositoryProtocol = repo or LedgerRepository()
        self._owner_id = (owner_id or settings.OWNER_ID).lower()
        self._clock = clock

    @property
    def owner_id(self) -> str:
        return self._owner_id

    def _require_owner(self, caller: str) -> None:
        if caller.lower() != self._owner_id:
            raise NotOwnerError(caller)

    async def _status_or_default(self, db: AsyncSession, collection_id: str) -> CollectionStatus:
        status = await self._repo.get_status(db, collection_id)
        return status or CollectionStatus(collection_id=collection_id)

    # ------------------------------------------------------------------
    # Crash responses
    # ------------------------------------------------------------------

    async def respond(
        self, db: AsyncSession, caller: str, response: CrashResponse
    ) -> RespondOutcome:
        caller = caller.lower()
        if not await self._repo.is_authorized(db, caller):
            logger.info("Rejected response from unauthorized caller %s", caller)
            raise UnauthorizedError(caller)
        response = check_crash_response(response)

        kind = CrashKind(response.crash_kind)
        status = await self._repo.lock_status(db, response.collection_id)
        escalate = should_escalate(
            kind, response.current_price, response.baseline_price, response.severity_bps
        )
        entering_emergency = escalate and status.mode is CollectionMode.NORMAL

        record = await self._repo.append_crash(db, response, reporter=caller)
        status = replace(
            status,
            emergency_mode=status.emergency_mode or entering_emergency,
            last_crash_at=response.detected_at,
            last_crash_price=response.current_price,
            crash_count=status.crash_count + 1,
        )
        await self._repo.save_status(db, status)

        if entering_emergency:
            reason = f"{kind.name} severity={response.severity_bps}bps seq={record.seq}"
            await self._repo.append_emergency_event(
                db,
                response.collection_id,
                True,
                ModeChangeTrigger.ESCALATION,
                reason,
                caller,
            )
            logger.warning(
                "Emergency mode ON: collection=%s %s", response.collection_id, reason
            )

        logger.info(
            "Crash recorded: seq=%d collection=%s kind=%s severity=%d reporter=%s",
            record.seq,
            record.collection_id,
            kind.name,
            record.severity_bps,
            caller,
        )
        return RespondOutcome(record=record, status=status, escalated=entering_emergency)

    # ------------------------------------------------------------------
    # Administration (owner only)
    # ------------------------------------------------------------------

    async def authorize_detector(
        self, db: AsyncSession, caller: str, identity: str
    ) -> DetectorAuthorization:
        return await self._set_authorization(db, caller, identity, True)

    async def deauthorize_detector(
        self, db: AsyncSession, caller: str, identity: str
    ) -> DetectorAuthorization:
        return await self._set_authorization(db, caller, identity, False)

    async def _set_authorization(
        self, db: AsyncSession, caller: str, identity: str, authorized: bool
    ) -> DetectorAuthorization:
        self._require_owner(caller)
        identity = check_identity(identity)
        result = await self._repo.set_authorization(db, identity, authorized, self._owner_id)
        logger.info("Detector %s authorized=%s", identity, authorized)
        return result

    async def list_detectors(self, db: AsyncSession, caller: str) -> list[DetectorAuthorization]:
        self._require_owner(caller)
        return await self._repo.list_authorizations(db)

    async def set_emergency_mode(
        self,
        db: AsyncSession,
        caller: str,
        collection_id: str,
        enabled: bool,
        reason: str,
    ) -> CollectionStatus:
        """Force the emergency flag; the only way back to NORMAL."""
        self._require_owner(caller)
        collection_id = check_collection_id(collection_id)
        reason = reason.strip()
        if not reason:
            raise InvalidInputError("reason is empty")

        status = await self._repo.lock_status(db, collection_id)
        status = replace(status, emergency_mode=enabled)
        await self._repo.save_status(db, status)
        await self._repo.append_emergency_event(
            db, collection_id, enabled, ModeChangeTrigger.OVERRIDE, reason, self._owner_id
        )
        logger.warning(
            "Emergency mode override: collection=%s enabled=%s reason=%s",
            collection_id,
            enabled,
            reason,
        )
        return status

    async def emergency_events(
        self, db: AsyncSession, collection_id: str, limit: int = 50
    ) -> list[EmergencyEvent]:
        collection_id = check_collection_id(collection_id)
        return await self._repo.list_emergency_events(db, collection_id, limit)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def is_healthy(
        self, db: AsyncSession, collection_id: str, now: int | None = None
    ) -> bool:
        collection_id = check_collection_id(collection_id)
        status = await self._status_or_default(db, collection_id)
        return self._healthy(status, self._clock() if now is None else now)

    @staticmethod
    def _healthy(status: CollectionStatus, now: int) -> bool:
        if status.emergency_mode:
            return False
        recent = (
            status.last_crash_at > 0
            and now - status.last_crash_at < HEALTH_SILENCE_WINDOW_SECONDS
        )
        return not recent

    async def recent_crashes(
        self,
        db: AsyncSession,
        limit: int = RECENT_HISTORY_CAP,
        collection_id: str | None = None,
    ) -> list[CrashRecord]:
        """Newest first, never more than RECENT_HISTORY_CAP records."""
        if limit < 1:
            raise InvalidInputError(f"limit must be >= 1, got {limit}")
        if collection_id is not None:
            collection_id = check_collection_id(collection_id)
        limit = min(limit, RECENT_HISTORY_CAP)
        return await self._repo.list_recent_crashes(db, limit, collection_id)

    async def collection_stats(
        self, db: AsyncSession, collection_id: str, now: int | None = None
    ) -> CollectionStats:
        collection_id = check_collection_id(collection_id)
        status = await self._status_or_default(db, collection_id)
        total = await self._repo.count_crashes(db)
        return CollectionStats(
            collection_id=collection_id,
            mode=status.mode,
            last_crash_at=status.last_crash_at,
            last_crash_price=status.last_crash_price,
            crash_count=status.crash_count,
            total_crashes=total,
            healthy=self._healthy(status, self._clock() if now is None else now),
        )
