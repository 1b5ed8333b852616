"""HTTP tests for the trap, response and admin routers.

The database session and ledger store are replaced through
app.dependency_overrides, so no PostgreSQL or Redis is needed.
"""

import pytest
from httpx import AsyncClient

from src.ct_collector.api.router import get_collector
from src.ct_collector.domain.models import Snapshot
from src.ct_common.codec import to_hex
from src.ct_common.database import get_db_session
from src.ct_common.errors import StaleDataError
from src.ct_gateway.auth.jwt_handler import create_access_token, decode_token
from src.ct_response.api.router import get_ledger_service
from src.ct_response.application.service import ResponseLedgerService
from src.main import app
from tests.unit.factories import (
    COLLECTION,
    DETECTOR,
    ETH,
    OWNER,
    T0,
    FakeLedgerRepository,
    make_window,
)

API = "/api/v1"


class _NoopTransaction:
    async def __aenter__(self) -> "_NoopTransaction":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    def begin(self) -> _NoopTransaction:
        return _NoopTransaction()


class FakeCollector:
    def __init__(self, snapshot: Snapshot | None = None, error: Exception | None = None) -> None:
        self._snapshot = snapshot
        self._error = error

    async def collect_encoded(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._snapshot.encode()


async def _fake_session():
    yield FakeSession()


def _bearer(identity: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(identity)}"}


@pytest.fixture
def ledger() -> ResponseLedgerService:
    service = ResponseLedgerService(repo=FakeLedgerRepository(), owner_id=OWNER)
    app.dependency_overrides[get_ledger_service] = lambda: service
    app.dependency_overrides[get_db_session] = _fake_session
    return service


def _crash_body(**kwargs) -> dict:
    body = {
        "reporter_tag": "floor-crash-trap",
        "collection_id": COLLECTION,
        "current_price": str(6 * ETH),
        "baseline_price": str(10 * ETH),
        "crash_kind": 2,
        "detected_at": T0,
        "severity_bps": 4000,
    }
    body.update(kwargs)
    return body


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestCollect:
    async def test_collect_returns_snapshot(self, client: AsyncClient) -> None:
        snap = Snapshot(1, 10 * ETH, T0, COLLECTION, "floor-crash-trap")
        app.dependency_overrides[get_collector] = lambda: FakeCollector(snap)

        resp = await client.get(f"{API}/trap/collect")

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["snapshot"]["price"] == str(10 * ETH)
        assert data["encoded"] == to_hex(snap.encode())

    async def test_collect_failure_maps_to_error_envelope(self, client: AsyncClient) -> None:
        app.dependency_overrides[get_collector] = lambda: FakeCollector(
            error=StaleDataError("primary", 0, T0)
        )

        resp = await client.get(f"{API}/trap/collect")

        assert resp.status_code == 422
        assert resp.json()["code"] == 1002
        assert resp.json()["data"] is None


class TestShouldRespond:
    async def test_flash_crash_detected(self, client: AsyncClient) -> None:
        snapshots = [to_hex(s.encode()) for s in make_window([6 * ETH, 10 * ETH, 10 * ETH])]

        resp = await client.post(f"{API}/trap/should-respond", json={"snapshots": snapshots})

        data = resp.json()["data"]
        assert data["triggered"] is True
        assert data["response"]["crash_kind_name"] == "FLASH_CRASH"
        assert data["response"]["severity_bps"] == 4000
        assert data["response"]["current_price"] == str(6 * ETH)

    async def test_bad_hex_is_not_triggered(self, client: AsyncClient) -> None:
        resp = await client.post(f"{API}/trap/should-respond", json={"snapshots": ["nothex"]})
        assert resp.status_code == 200
        assert resp.json()["data"] == {"triggered": False, "payload": "0x", "response": None}


class TestRespond:
    async def test_requires_token(self, client: AsyncClient, ledger) -> None:
        resp = await client.post(f"{API}/response/respond", json=_crash_body())
        assert resp.status_code == 401

    async def test_unauthorized_detector(self, client: AsyncClient, ledger) -> None:
        resp = await client.post(
            f"{API}/response/respond", json=_crash_body(), headers=_bearer(DETECTOR)
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 2001

    async def test_full_flow(self, client: AsyncClient, ledger) -> None:
        resp = await client.post(
            f"{API}/admin/detectors/{DETECTOR}/authorize", headers=_bearer(OWNER)
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["authorized"] is True

        resp = await client.post(
            f"{API}/response/respond", json=_crash_body(), headers=_bearer(DETECTOR)
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Emergency mode activated"
        assert body["data"]["escalated"] is True
        assert body["data"]["status"]["mode"] == "EMERGENCY"
        assert body["data"]["record"]["seq"] == 1

        health = await client.get(f"{API}/response/collections/{COLLECTION}/health")
        assert health.json()["data"]["healthy"] is False

        crashes = await client.get(f"{API}/response/crashes", params={"limit": 5})
        items = crashes.json()["data"]["items"]
        assert len(items) == 1
        assert items[0]["crash_kind_name"] == "FLASH_CRASH"

        stats = await client.get(f"{API}/response/collections/{COLLECTION}/stats")
        assert stats.json()["data"]["crash_count"] == 1
        assert stats.json()["data"]["total_crashes"] == 1

    async def test_invalid_input_after_authorization(self, client: AsyncClient, ledger) -> None:
        await client.post(f"{API}/admin/detectors/{DETECTOR}/authorize", headers=_bearer(OWNER))

        resp = await client.post(
            f"{API}/response/respond", json=_crash_body(crash_kind=0), headers=_bearer(DETECTOR)
        )

        assert resp.status_code == 422
        assert resp.json()["code"] == 2002

    async def test_crashes_limit_out_of_range(self, client: AsyncClient, ledger) -> None:
        resp = await client.get(f"{API}/response/crashes", params={"limit": 0})
        assert resp.status_code == 422


class TestAdmin:
    async def test_non_owner_rejected(self, client: AsyncClient, ledger) -> None:
        resp = await client.post(
            f"{API}/admin/detectors/{DETECTOR}/authorize", headers=_bearer(DETECTOR)
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 2003

    async def test_issue_token(self, client: AsyncClient, ledger) -> None:
        resp = await client.post(
            f"{API}/admin/tokens", json={"identity": DETECTOR.upper().replace("0X", "0x")},
            headers=_bearer(OWNER),
        )
        assert resp.status_code == 200
        token = resp.json()["data"]["access_token"]
        assert decode_token(token)["sub"] == DETECTOR

    async def test_emergency_override_and_events(self, client: AsyncClient, ledger) -> None:
        resp = await client.post(
            f"{API}/admin/collections/{COLLECTION}/emergency",
            json={"enabled": True, "reason": "suspicious wash trading"},
            headers=_bearer(OWNER),
        )
        assert resp.json()["data"]["mode"] == "EMERGENCY"

        events = await client.get(
            f"{API}/admin/collections/{COLLECTION}/emergency-events", headers=_bearer(OWNER)
        )
        items = events.json()["data"]["items"]
        assert items[0]["trigger"] == "OVERRIDE"
        assert items[0]["reason"] == "suspicious wash trading"

    async def test_list_detectors(self, client: AsyncClient, ledger) -> None:
        await client.post(f"{API}/admin/detectors/{DETECTOR}/authorize", headers=_bearer(OWNER))
        await client.post(f"{API}/admin/detectors/{DETECTOR}/deauthorize", headers=_bearer(OWNER))

        resp = await client.get(f"{API}/admin/detectors", headers=_bearer(OWNER))

        assert resp.json()["data"]["items"][0]["authorized"] is False
