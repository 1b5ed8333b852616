"""Unit tests for the gateway middlewares (rate limiting, request log)."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from src.ct_gateway.middleware.rate_limit import RateLimitMiddleware


class FakeRedis:
    def __init__(self) -> None:
        self.counts: dict[str, int] = {}
        self.expiries: dict[str, int] = {}

    async def incr(self, key: str) -> int:
        self.counts[key] = self.counts.get(key, 0) + 1
        return self.counts[key]

    async def expire(self, key: str, seconds: int) -> bool:
        self.expiries[key] = seconds
        return True


class DownRedis:
    async def incr(self, key: str) -> int:
        raise RedisConnectionError("Connection refused")

    async def expire(self, key: str, seconds: int) -> bool:
        raise RedisConnectionError("Connection refused")


def _app(redis: FakeRedis, limit: int, enabled: bool = True) -> FastAPI:
    app = FastAPI()

    async def factory() -> FakeRedis:
        return redis

    app.add_middleware(
        RateLimitMiddleware, limit_per_minute=limit, enabled=enabled, redis_factory=factory
    )

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"pong": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


async def _get(app: FastAPI, path: str, headers: dict | None = None):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.get(path, headers=headers)


class TestRateLimit:
    async def test_over_limit_returns_429(self) -> None:
        redis = FakeRedis()
        app = _app(redis, limit=2)
        assert (await _get(app, "/ping")).status_code == 200
        assert (await _get(app, "/ping")).status_code == 200
        resp = await _get(app, "/ping")
        assert resp.status_code == 429
        assert resp.json()["code"] == 9001
        assert int(resp.headers["Retry-After"]) <= 60

    async def test_window_key_expires(self) -> None:
        redis = FakeRedis()
        await _get(_app(redis, limit=5), "/ping")
        assert list(redis.expiries.values()) == [60]

    async def test_forwarded_ip_counted_separately(self) -> None:
        redis = FakeRedis()
        app = _app(redis, limit=1)
        assert (await _get(app, "/ping", {"X-Forwarded-For": "10.0.0.1"})).status_code == 200
        assert (await _get(app, "/ping", {"X-Forwarded-For": "10.0.0.2"})).status_code == 200
        assert (await _get(app, "/ping", {"X-Forwarded-For": "10.0.0.1"})).status_code == 429

    async def test_health_is_exempt(self) -> None:
        redis = FakeRedis()
        app = _app(redis, limit=0)
        assert (await _get(app, "/health")).status_code == 200
        assert redis.counts == {}

    async def test_redis_outage_lets_requests_through(self) -> None:
        app = _app(DownRedis(), limit=0)
        resp = await _get(app, "/ping")
        assert resp.status_code == 200
        assert resp.json() == {"pong": "ok"}

    @pytest.mark.parametrize("limit", [0, 1])
    async def test_disabled_never_limits(self, limit: int) -> None:
        redis = FakeRedis()
        app = _app(redis, limit=limit, enabled=False)
        assert (await _get(app, "/ping")).status_code == 200
        assert redis.counts == {}


class TestRequestLog:
    async def test_request_id_header_is_set(self, client) -> None:
        resp = await client.get("/health")
        assert resp.headers["X-Request-ID"].startswith("req_")
