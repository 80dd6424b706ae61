"""Tests for warehouse use cases."""

from unittest.mock import AsyncMock

import pytest

from almacen.application.dto.requests import CreateWarehouseRequest
from almacen.application.use_cases.manage_warehouses import (
    CreateWarehouseUseCase,
    DeleteWarehouseUseCase,
    GetWarehouseUseCase,
    ListWarehousesUseCase,
)
from almacen.core.exceptions import ValidationError, WarehouseNotFoundError


@pytest.fixture
def mock_warehouse_store(sample_warehouse):
    store = AsyncMock()

    async def _create(warehouse):
        return warehouse.model_copy(update={"id": 3})

    store.create.side_effect = _create
    store.get.return_value = sample_warehouse
    store.list_warehouses.return_value = [sample_warehouse]
    store.count_parts.return_value = 0
    store.delete.return_value = True
    return store


class TestWarehouseUseCases:
    async def test_create_strips(self, mock_warehouse_store):
        use_case = CreateWarehouseUseCase(warehouse_store=mock_warehouse_store)
        warehouse = await use_case.execute(
            CreateWarehouseRequest(name=" Sede Norte ", address="Km 12", department="Piura")
        )
        assert warehouse.id == 3
        assert warehouse.name == "Sede Norte"

    async def test_create_blank_rejected(self, mock_warehouse_store):
        use_case = CreateWarehouseUseCase(warehouse_store=mock_warehouse_store)
        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateWarehouseRequest(name="   ", address="Km 12", department="Piura")
            )

    async def test_get_missing(self, mock_warehouse_store):
        mock_warehouse_store.get.return_value = None
        with pytest.raises(WarehouseNotFoundError):
            await GetWarehouseUseCase(warehouse_store=mock_warehouse_store).execute(8)

    async def test_list(self, mock_warehouse_store):
        use_case = ListWarehousesUseCase(warehouse_store=mock_warehouse_store)
        response = use_case.to_list_response(await use_case.execute(department="Lima"))
        assert response.total == 1
        assert response.items[0].department == "Lima"

    async def test_delete_with_parts_rejected(self, mock_warehouse_store):
        mock_warehouse_store.count_parts.return_value = 2
        with pytest.raises(ValidationError):
            await DeleteWarehouseUseCase(warehouse_store=mock_warehouse_store).execute(1)
        mock_warehouse_store.delete.assert_not_called()

    async def test_delete_empty(self, mock_warehouse_store):
        await DeleteWarehouseUseCase(warehouse_store=mock_warehouse_store).execute(1)
        mock_warehouse_store.delete.assert_called_once_with(1)
