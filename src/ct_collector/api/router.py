"""ct_collector REST endpoints.

GET /trap/collect - read both feeds, return one validated snapshot
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.ct_collector.application.schemas import CollectResponse
from src.ct_collector.application.service import CollectorService
from src.ct_collector.domain.models import Snapshot
from src.ct_common.capabilities import Collector
from src.ct_common.response import ApiResponse, success_response

router = APIRouter(prefix="/trap", tags=["trap"])

_service = CollectorService.from_settings(settings)


def get_collector() -> Collector:
    return _service


@router.get("/collect")
async def collect(
    request: Request,
    collector: Annotated[Collector, Depends(get_collector)],
) -> ApiResponse:
    snapshot = Snapshot.decode(await collector.collect_encoded())
    return success_response(CollectResponse.from_domain(snapshot).model_dump(), request)
