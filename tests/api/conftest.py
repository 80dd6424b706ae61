"""Fixtures for API tests against a migrated temporary database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from almacen.api.main import app
from almacen.infrastructure.storage.sqlite import connection as conn_module
from almacen.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
async def client(tmp_path: Path) -> AsyncGenerator[AsyncClient, None]:
    """Async client over the real app with storage on a temp database."""
    db_path = tmp_path / "api.db"
    await initialize_database(db_path, create_backup_before=False)

    settings = MagicMock()
    settings.storage.db_path = db_path
    settings.storage.pool_size = 2
    settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            await conn_module.close_pool()


@pytest.fixture
async def warehouse(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/warehouses",
        json={"name": "Almacén Central", "address": "Av. Industrial 120", "department": "Lima"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def part_payload(warehouse: dict) -> dict:
    return {
        "name": "Filtro de aceite",
        "part_number": "flt-0042",
        "category": "Filtros",
        "warehouse_id": warehouse["id"],
        "initial_stock": 50,
        "minimum_stock": 5,
        "unit_price": 12.5,
        "supplier": {"name": "Repuestos Andinos"},
    }
