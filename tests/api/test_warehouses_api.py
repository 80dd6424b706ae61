"""API tests for warehouse endpoints."""

from httpx import AsyncClient


class TestWarehouses:
    async def test_create_and_get(self, client: AsyncClient, warehouse):
        response = await client.get(f"/api/warehouses/{warehouse['id']}")
        assert response.status_code == 200
        assert response.json()["department"] == "Lima"

    async def test_list(self, client: AsyncClient, warehouse):
        await client.post(
            "/api/warehouses", json={"name": "Norte", "address": "Km 12", "department": "Piura"}
        )
        response = await client.get("/api/warehouses", params={"department": "Piura"})
        assert [w["name"] for w in response.json()["items"]] == ["Norte"]

    async def test_missing(self, client: AsyncClient):
        response = await client.get("/api/warehouses/999")
        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "WAREHOUSE_NOT_FOUND"
        assert body["hint"]

    async def test_delete_with_parts_refused(self, client: AsyncClient, warehouse, part_payload):
        await client.post("/api/parts", json=part_payload)
        response = await client.delete(f"/api/warehouses/{warehouse['id']}")
        assert response.status_code == 400

    async def test_delete_empty(self, client: AsyncClient, warehouse):
        response = await client.delete(f"/api/warehouses/{warehouse['id']}")
        assert response.status_code == 204

    async def test_blank_name(self, client: AsyncClient):
        response = await client.post(
            "/api/warehouses", json={"name": "", "address": "x", "department": "y"}
        )
        assert response.status_code == 422
