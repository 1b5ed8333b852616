"""Repository Protocol: the ledger's persistent store.

Unit tests inject an in-memory fake that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ct_common.enums import ModeChangeTrigger
from src.ct_response.domain.models import (
    CollectionStatus,
    CrashRecord,
    CrashResponse,
    DetectorAuthorization,
    EmergencyEvent,
)


class LedgerRepositoryProtocol(Protocol):
    async def is_authorized(self, db: AsyncSession, identity: str) -> bool: ...

    async def set_authorization(
        self, db: AsyncSession, identity: str, authorized: bool, updated_by: str
    ) -> DetectorAuthorization: ...

    async def list_authorizations(self, db: AsyncSession) -> list[DetectorAuthorization]: ...

    async def get_status(
        self, db: AsyncSession, collection_id: str
    ) -> CollectionStatus | None: ...

    async def lock_status(self, db: AsyncSession, collection_id: str) -> CollectionStatus:
        """Status row for update, created with defaults if absent."""
        ...

    async def save_status(self, db: AsyncSession, status: CollectionStatus) -> None: ...

    async def append_crash(
        self, db: AsyncSession, response: CrashResponse, reporter: str
    ) -> CrashRecord: ...

    async def list_recent_crashes(
        self, db: AsyncSession, limit: int, collection_id: str | None
    ) -> list[CrashRecord]: ...

    async def count_crashes(self, db: AsyncSession) -> int: ...

    async def append_emergency_event(
        self,
        db: AsyncSession,
        collection_id: str,
        emergency_mode: bool,
        trigger: ModeChangeTrigger,
        reason: str,
        actor: str,
    ) -> EmergencyEvent: ...

    async def list_emergency_events(
        self, db: AsyncSession, collection_id: str, limit: int
    ) -> list[EmergencyEvent]: ...
