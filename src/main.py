"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.ct_admin.api.router import router as admin_router
from src.ct_collector.api.router import router as collector_router
from src.ct_common.database import engine
from src.ct_common.errors import AppError
from src.ct_common.redis_client import close_redis, get_redis
from src.ct_common.response import error_response
from src.ct_detector.api.router import router as detector_router
from src.ct_detector.domain.payload import PAYLOAD_FIELDS
from src.ct_gateway.middleware.rate_limit import RateLimitMiddleware
from src.ct_gateway.middleware.request_log import RequestLogMiddleware
from src.ct_response.api.router import router as response_router
from src.ct_response.domain.compatibility import check_payload_compatibility
from src.ct_response.domain.models import RESPONSE_FIELDS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: payload layout check, DB + Redis connections. Shutdown: dispose."""
    # Startup
    check_payload_compatibility(PAYLOAD_FIELDS, RESPONSE_FIELDS)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    logger.info("Monitoring collection %s as %s", settings.COLLECTION_ID, settings.REPORTER_TAG)
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# Starlette runs the last added middleware first: request IDs exist before rate limiting
app.add_middleware(
    RateLimitMiddleware,
    limit_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    enabled=settings.RATE_LIMIT_ENABLED,
)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(collector_router, prefix="/api/v1")
app.include_router(detector_router, prefix="/api/v1")
app.include_router(response_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
