"""ct_detector REST endpoints.

POST /trap/should-respond - classify a newest-first window of encoded snapshots
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.ct_common.capabilities import ResponseDecider
from src.ct_common.codec import TupleDecodeError, from_hex, to_hex
from src.ct_common.response import ApiResponse, success_response
from src.ct_detector.application.schemas import (
    CrashPayloadOut,
    ShouldRespondRequest,
    ShouldRespondResponse,
)
from src.ct_detector.application.service import DetectorService
from src.ct_detector.domain.payload import CrashPayload

router = APIRouter(prefix="/trap", tags=["trap"])

_service = DetectorService()


def get_response_decider() -> ResponseDecider:
    return _service


@router.post("/should-respond")
async def should_respond(
    request: Request,
    body: ShouldRespondRequest,
    decider: Annotated[ResponseDecider, Depends(get_response_decider)],
) -> ApiResponse:
    try:
        encoded = [from_hex(s) for s in body.snapshots]
    except TupleDecodeError:
        # Bad hex is just another malformed window
        encoded = []
    triggered, payload = decider.should_respond(encoded)
    data = ShouldRespondResponse(
        triggered=triggered,
        payload=to_hex(payload),
        response=CrashPayloadOut.from_domain(CrashPayload.decode(payload)) if triggered else None,
    )
    return success_response(data.model_dump(), request)
