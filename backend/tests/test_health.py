"""
Tests for health check endpoints.
"""
from httpx import AsyncClient


async def test_health_check(async_client: AsyncClient):
    response = await async_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["name"] == "SellGPT"
    assert "timestamp" in data


async def test_liveness_probe(async_client: AsyncClient):
    response = await async_client.get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


async def test_readiness_probe(async_client: AsyncClient):
    response = await async_client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "connected"
    assert data["checks"]["storage"] == "ok"


async def test_request_id_is_echoed(async_client: AsyncClient):
    response = await async_client.get("/health/live", headers={"X-Request-ID": "req-123"})

    assert response.headers["x-request-id"] == "req-123"
