"""API tests for health endpoints."""

from httpx import AsyncClient


async def test_health_reports_database(client: AsyncClient):
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["available"] is True
    assert data["uptime_seconds"] >= 0


async def test_request_id_echoed(client: AsyncClient):
    response = await client.get("/api/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Response-Time" in response.headers


async def test_root(client: AsyncClient):
    response = await client.get("/")
    assert response.json()["name"] == "Almacen Ledger API"
