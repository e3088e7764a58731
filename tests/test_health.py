"""Health endpoint and CORS tests."""

from contextlib import asynccontextmanager

import psycopg
import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from mediagate.interfaces.api.middleware.cors import CORSMiddleware
from mediagate.interfaces.api.resources.health import HealthResource


class _FakeConnection:
    async def execute(self, query: str) -> None:
        self.query = query


class _FakePool:
    def __init__(self, fail: bool = False) -> None:
        self._fail = fail

    @asynccontextmanager
    async def connection(self):
        if self._fail:
            raise psycopg.OperationalError("connection refused")
        yield _FakeConnection()


def _client(pool=None) -> TestClient:
    app = App()
    health = HealthResource(pool)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    """Create test client with health endpoints."""
    return _client()


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json["status"] == "ready"


def test_health_ready_checks_database() -> None:
    assert _client(_FakePool()).simulate_get("/v1/health/ready").status_code == 200
    result = _client(_FakePool(fail=True)).simulate_get("/v1/health/ready")
    assert result.status_code == 503
    assert result.json["status"] == "unavailable"


def test_cors_preflight_and_exposed_token_header() -> None:
    app = App(middleware=[CORSMiddleware(["https://player.example"])])
    app.add_route("/v1/health", HealthResource())
    client = TestClient(app)

    preflight = client.simulate_options(
        "/v1/health", headers={"Origin": "https://player.example"}
    )
    assert preflight.status_code == 204
    assert "X-Access-Code" in preflight.headers["Access-Control-Allow-Headers"]

    result = client.simulate_get("/v1/health", headers={"Origin": "https://player.example"})
    assert result.headers["Access-Control-Expose-Headers"] == "X-Stream-Token"

    foreign = client.simulate_get("/v1/health", headers={"Origin": "https://evil.example"})
    assert "Access-Control-Allow-Origin" not in foreign.headers
