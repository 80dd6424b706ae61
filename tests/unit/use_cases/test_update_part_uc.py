"""Tests for part update, lookup and delete use cases."""

from unittest.mock import AsyncMock

import pytest

from almacen.application.dto.requests import UpdatePartRequest
from almacen.application.use_cases.delete_part import DeletePartUseCase
from almacen.application.use_cases.get_part import GetPartUseCase, ListPartMovementsUseCase
from almacen.application.use_cases.update_part import UpdatePartUseCase
from almacen.core.exceptions import PartNotFoundError, ValidationError


@pytest.fixture
def mock_part_store(sample_part):
    store = AsyncMock()
    store.get_part.return_value = sample_part

    async def _update(part, expected_version):
        return part.model_copy(update={"version": expected_version + 1})

    store.update_part.side_effect = _update
    store.delete_part.return_value = True
    store.get_movements.return_value = list(reversed(sample_part.movements))
    return store


@pytest.fixture
def mock_warehouse_store():
    return AsyncMock()


class TestUpdatePartUseCase:
    async def test_partial_update(self, mock_part_store, mock_warehouse_store):
        use_case = UpdatePartUseCase(part_store=mock_part_store, warehouse_store=mock_warehouse_store)
        part = await use_case.execute(1, UpdatePartRequest(location="Estante B-3"))

        assert part.location == "Estante B-3"
        assert part.name == "Filtro de aceite"
        assert part.version == 1
        assert mock_part_store.update_part.call_args.kwargs["expected_version"] == 0

    async def test_supplier_replaced(self, mock_part_store, mock_warehouse_store):
        use_case = UpdatePartUseCase(part_store=mock_part_store, warehouse_store=mock_warehouse_store)
        part = await use_case.execute(
            1, UpdatePartRequest.model_validate({"supplier": {"name": "Importadora Sur"}})
        )
        assert part.supplier.name == "Importadora Sur"
        assert part.supplier.phone is None

    async def test_move_to_unknown_warehouse(self, mock_part_store, mock_warehouse_store):
        mock_warehouse_store.get.return_value = None
        use_case = UpdatePartUseCase(part_store=mock_part_store, warehouse_store=mock_warehouse_store)
        with pytest.raises(ValidationError):
            await use_case.execute(1, UpdatePartRequest(warehouse_id=9))
        mock_part_store.update_part.assert_not_called()

    async def test_clearing_name_rejected(self, mock_part_store, mock_warehouse_store):
        use_case = UpdatePartUseCase(part_store=mock_part_store, warehouse_store=mock_warehouse_store)
        with pytest.raises(ValidationError):
            await use_case.execute(1, UpdatePartRequest.model_validate({"name": None}))

    async def test_not_found(self, mock_part_store, mock_warehouse_store):
        mock_part_store.get_part.return_value = None
        use_case = UpdatePartUseCase(part_store=mock_part_store, warehouse_store=mock_warehouse_store)
        with pytest.raises(PartNotFoundError):
            await use_case.execute(2, UpdatePartRequest(name="x"))


class TestGetAndDeletePart:
    async def test_get_includes_movements(self, mock_part_store):
        use_case = GetPartUseCase(part_store=mock_part_store)
        response = use_case.to_response(await use_case.execute(1))
        assert response.id == 1
        assert len(response.movements) == 1

    async def test_get_not_found(self, mock_part_store):
        mock_part_store.get_part.return_value = None
        with pytest.raises(PartNotFoundError):
            await GetPartUseCase(part_store=mock_part_store).execute(3)

    async def test_delete(self, mock_part_store):
        await DeletePartUseCase(part_store=mock_part_store).execute(1)
        mock_part_store.delete_part.assert_called_once_with(1)

    async def test_delete_missing(self, mock_part_store):
        mock_part_store.delete_part.return_value = False
        with pytest.raises(PartNotFoundError):
            await DeletePartUseCase(part_store=mock_part_store).execute(1)


class TestListPartMovements:
    async def test_lists_history(self, mock_part_store):
        use_case = ListPartMovementsUseCase(part_store=mock_part_store)
        movements = await use_case.execute(1, limit=10, offset=0)
        response = use_case.to_response(1, movements)
        assert response.part_id == 1
        assert response.items[0].reason == "Stock inicial"

    @pytest.mark.parametrize("limit, offset", [(0, 0), (10, -1)])
    async def test_bad_paging(self, mock_part_store, limit, offset):
        with pytest.raises(ValidationError):
            await ListPartMovementsUseCase(part_store=mock_part_store).execute(1, limit, offset)
