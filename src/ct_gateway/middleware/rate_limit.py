"""Rate limiting middleware: Redis fixed-window counter per client IP.

  1. key = "ratelimit:{client_ip}:{unix_minute}"
  2. INCR key; on the first hit EXPIRE it after the window
  3. over the limit -> 429 ApiResponse (code 9001) with Retry-After

The client IP honours the first X-Forwarded-For hop (reverse proxy aware).
/health is never limited. When Redis is unreachable requests pass unlimited.
"""

import logging
import time
from collections.abc import Awaitable, Callable

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from src.ct_common.errors import RateLimitError
from src.ct_common.redis_client import get_redis
from src.ct_common.response import error_response

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60
_EXEMPT_PATHS = frozenset({"/health"})


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        limit_per_minute: int,
        enabled: bool = True,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
    ) -> None:
        super().__init__(app)
        self._limit = limit_per_minute
        self._enabled = enabled
        self._redis_factory = redis_factory

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._enabled or request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        now = int(time.time())
        window = now // _WINDOW_SECONDS
        ip = client_ip(request)
        key = f"ratelimit:{ip}:{window}"

        try:
            redis = await self._redis_factory()
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, _WINDOW_SECONDS)
        except RedisError as e:
            logger.warning("Rate limiter unavailable, letting request through: %s", e)
            return await call_next(request)

        if count > self._limit:
            logger.info("Rate limit exceeded: ip=%s count=%d", ip, count)
            err = RateLimitError()
            retry_after = _WINDOW_SECONDS - now % _WINDOW_SECONDS
            return JSONResponse(
                status_code=err.http_status,
                content=error_response(err.code, err.message).model_dump(),
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)
