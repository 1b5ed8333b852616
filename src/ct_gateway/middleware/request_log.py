"""Request logging middleware.

Tags every request with a short id (request.state.request_id, echoed in the
ApiResponse envelope and the X-Request-ID header) and logs one line per request:

    INFO [POST] /api/v1/response/respond -> 200 (12ms) 10.0.0.7 req_a1b2c3d4e5f6

5xx responses log at WARNING.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.ct_gateway.middleware.rate_limit import client_ip

logger = logging.getLogger("ct.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s -> %d (%.0fms) %s %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client_ip(request),
            request_id,
        )
        return response
