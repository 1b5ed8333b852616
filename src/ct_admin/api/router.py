"""Owner-only administration endpoints.

POST /admin/detectors/{identity}/authorize       - grant respond() rights
POST /admin/detectors/{identity}/deauthorize     - revoke them
GET  /admin/detectors                            - authorization table
POST /admin/collections/{id}/emergency           - force emergency mode on/off
GET  /admin/collections/{id}/emergency-events    - mode change history
POST /admin/tokens                               - mint a bearer token for an identity
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ct_admin.application.schemas import (
    DetectorAuthorizationOut,
    DetectorListResponse,
    EmergencyEventListResponse,
    EmergencyEventOut,
    EmergencyOverrideRequest,
    TokenRequest,
    TokenResponse,
)
from src.ct_common.database import get_db_session
from src.ct_common.response import ApiResponse, success_response
from src.ct_gateway.auth.dependencies import require_owner
from src.ct_gateway.auth.jwt_handler import create_access_token
from src.ct_response.api.router import get_ledger_service
from src.ct_response.application.schemas import CollectionStatusOut
from src.ct_response.application.service import ResponseLedgerService
from src.ct_response.domain.validation import check_identity

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/detectors/{identity}/authorize")
async def authorize_detector(
    identity: str,
    request: Request,
    owner: Annotated[str, Depends(require_owner)],
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    async with db.begin():
        result = await service.authorize_detector(db, owner, identity)
    return success_response(DetectorAuthorizationOut.from_domain(result).model_dump(), request)


@router.post("/detectors/{identity}/deauthorize")
async def deauthorize_detector(
    identity: str,
    request: Request,
    owner: Annotated[str, Depends(require_owner)],
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    async with db.begin():
        result = await service.deauthorize_detector(db, owner, identity)
    return success_response(DetectorAuthorizationOut.from_domain(result).model_dump(), request)


@router.get("/detectors")
async def list_detectors(
    request: Request,
    owner: Annotated[str, Depends(require_owner)],
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await service.list_detectors(db, owner)
    data = DetectorListResponse(items=[DetectorAuthorizationOut.from_domain(a) for a in items])
    return success_response(data.model_dump(), request)


@router.post("/collections/{collection_id}/emergency")
async def set_emergency_mode(
    collection_id: str,
    body: EmergencyOverrideRequest,
    request: Request,
    owner: Annotated[str, Depends(require_owner)],
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    async with db.begin():
        status = await service.set_emergency_mode(
            db, owner, collection_id, body.enabled, body.reason
        )
    return success_response(CollectionStatusOut.from_domain(status).model_dump(), request)


@router.get("/collections/{collection_id}/emergency-events")
async def emergency_events(
    collection_id: str,
    request: Request,
    owner: Annotated[str, Depends(require_owner)],
    service: Annotated[ResponseLedgerService, Depends(get_ledger_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    events = await service.emergency_events(db, collection_id, limit)
    data = EmergencyEventListResponse(items=[EmergencyEventOut.from_domain(e) for e in events])
    return success_response(data.model_dump(), request)


@router.post("/tokens")
async def issue_token(
    body: TokenRequest,
    request: Request,
    owner: Annotated[str, Depends(require_owner)],
) -> ApiResponse:
    identity = check_identity(body.identity)
    data = TokenResponse(
        identity=identity,
        access_token=create_access_token(identity),
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )
    return success_response(data.model_dump(), request)
