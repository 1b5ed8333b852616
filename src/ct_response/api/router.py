"""ct_response REST endpoints.

POST /response/respond                         - submit a crash response (authorized detectors)
GET  /response/crashes                         - recent crash records, newest first, at most 20
GET  /response/collections/{id}/health         - False in emergency or right after a crash
GET  /response/collections/{id}/stats          - per-collection aggregates
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ct_common.database import get_db_session
from src.ct_common.response import ApiResponse, success_response
from src.ct_gateway.auth.dependencies import get_caller_identity
from src.ct_response.application.schemas import (
    CollectionStatsOut,
    CrashListResponse,
    CrashRecordOut,
    HealthOut,
    RespondRequest,
    RespondResponse,
)
from src.ct_response.application.service import ResponseLedgerService
from src.ct_response.domain.constants import RECENT_HISTORY_CAP

router = APIRouter(prefix="/response", tags=["response"])

_service = ResponseLedgerService()


def get_ledger_service() -> ResponseLedgerService:
    return _service


@router.post("/respond")
async def respond(
    request: Request,
    body: RespondRequest,
    caller: Annotated[str, Depends(get_caller_identity)],
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    async with db.begin():
        outcome = await service.respond(db, caller, body.to_domain())
    resp = success_response(RespondResponse.from_domain(outcome).model_dump(), request)
    resp.message = "Emergency mode activated" if outcome.escalated else "Crash recorded"
    return resp


@router.get("/crashes")
async def recent_crashes(
    request: Request,
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(RECENT_HISTORY_CAP, ge=1),
    collection_id: str | None = Query(None),
) -> ApiResponse:
    records = await service.recent_crashes(db, limit, collection_id)
    data = CrashListResponse(items=[CrashRecordOut.from_domain(r) for r in records])
    return success_response(data.model_dump(), request)


@router.get("/collections/{collection_id}/health")
async def health(
    collection_id: str,
    request: Request,
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    healthy = await service.is_healthy(db, collection_id)
    data = HealthOut(collection_id=collection_id.lower(), healthy=healthy)
    return success_response(data.model_dump(), request)


@router.get("/collections/{collection_id}/stats")
async def collection_stats(
    collection_id: str,
    request: Request,
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    stats = await service.collection_stats(db, collection_id)
    return success_response(CollectionStatsOut.from_domain(stats).model_dump(), request)
