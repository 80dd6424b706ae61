"""Tests for SQLite warehouse store."""

import pytest

from almacen.core.entities import Part, Warehouse
from almacen.core.services import stock_ledger
from almacen.infrastructure.storage.sqlite import SQLitePartStore, SQLiteWarehouseStore


@pytest.fixture
def store(initialized_db) -> SQLiteWarehouseStore:
    return SQLiteWarehouseStore()


class TestWarehouseStore:
    async def test_create_get(self, store):
        created = await store.create(Warehouse(name="Central", address="Av. 1", department="Lima"))
        fetched = await store.get(created.id)
        assert fetched.name == "Central"
        assert await store.get(created.id + 100) is None

    async def test_list_filters(self, store):
        await store.create(Warehouse(name="Central", address="Av. Industrial", department="Lima"))
        await store.create(Warehouse(name="Norte", address="Km 12", department="Piura"))

        assert len(await store.list_warehouses()) == 2
        assert [w.name for w in await store.list_warehouses(department="Piura")] == ["Norte"]
        assert [w.name for w in await store.list_warehouses(search="industrial")] == ["Central"]

    async def test_count_and_delete(self, store):
        warehouse = await store.create(Warehouse(name="Central", address="Av. 1", department="Lima"))
        part = stock_ledger.open_ledger(
            Part(name="Perno", part_number="P-1", warehouse_id=warehouse.id), 3
        )
        await SQLitePartStore().create_part(part)

        assert await store.count_parts(warehouse.id) == 1
        empty = await store.create(Warehouse(name="Vacío", address="Av. 2", department="Lima"))
        assert await store.count_parts(empty.id) == 0
        assert await store.delete(empty.id) is True
        assert await store.get(empty.id) is None
