"""Health check endpoint tests."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_health_returns_ok(seeded_client: AsyncClient):
    response = await seeded_client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "0.1.0"
    assert data["status"] == "ok"
    assert data["store"] == "ok"
    assert data["media"] == "configured"
    assert data["stock_photos"] == "configured"
    assert data["demo_mode"] is False


@pytest.mark.asyncio
async def test_health_reports_missing_store(client: AsyncClient):
    data = (await client.get("/api/v1/health")).json()
    assert data["status"] == "ok"
    assert data["store"] == "missing"


@pytest.mark.asyncio
async def test_health_reports_corrupt_store(client: AsyncClient, store):
    store.path.write_text("{not json", encoding="utf-8")
    data = (await client.get("/api/v1/health")).json()
    assert data["status"] == "degraded"
    assert data["store"] == "error"


@pytest.mark.asyncio
async def test_request_id_is_propagated(client: AsyncClient):
    response = await client.get("/api/v1/health", headers={"X-Request-Id": "req-123"})
    assert response.headers["X-Request-Id"] == "req-123"
    generated = await client.get("/api/v1/health")
    assert generated.headers["X-Request-Id"]
