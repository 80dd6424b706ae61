"""Tests for ApplyStockMovementUseCase."""

from datetime import date, datetime
from unittest.mock import AsyncMock

import pytest

from almacen.application.dto.requests import StockMovementRequest
from almacen.application.use_cases.apply_stock_movement import ApplyStockMovementUseCase
from almacen.config.settings import LedgerSettings
from almacen.core.entities import MovementType, PaymentMethod
from almacen.core.exceptions import (
    ConflictError,
    InsufficientStockError,
    PartNotFoundError,
    ValidationError,
)
from almacen.core.services import resolve_period
from almacen.infrastructure.clock import FixedClock, set_clock


@pytest.fixture
def mock_part_store(sample_part):
    store = AsyncMock()
    store.get_part.return_value = sample_part.model_copy(update={"movements": [], "version": 3})

    async def _append(part, movement, expected_version):
        stored = movement.model_copy(update={"id": 2})
        return part.model_copy(update={"version": expected_version + 1}), stored

    store.append_movement.side_effect = _append
    return store


@pytest.fixture
def mock_finance_store():
    store = AsyncMock()

    async def _create(record):
        return record.model_copy(update={"id": 5})

    store.create_record.side_effect = _create
    return store


@pytest.fixture
def use_case(mock_part_store, mock_finance_store):
    return ApplyStockMovementUseCase(
        part_store=mock_part_store,
        finance_store=mock_finance_store,
        settings=LedgerSettings(),
    )


class TestApplyStockMovementUseCase:
    async def test_entry_increments_and_records_expense(self, use_case, mock_finance_store):
        request = StockMovementRequest(
            type=MovementType.IN,
            quantity=20,
            reason="Compra a proveedor",
            reference="OC-118",
            payment_method=PaymentMethod.TRANSFER,
        )
        result = await use_case.execute(1, request)

        assert result.part.current_stock == 70
        assert result.movement.previous_stock == 50
        assert result.movement.new_stock == 70
        assert result.expense_record.id == 5
        record = mock_finance_store.create_record.call_args[0][0]
        assert record.amount == 20 * 12.5
        assert record.payment_method == PaymentMethod.TRANSFER
        assert record.reference == "OC-118"

    async def test_expected_version_passed(self, use_case, mock_part_store):
        request = StockMovementRequest(type=MovementType.OUT, quantity=15, reason="Mantenimiento")
        await use_case.execute(1, request)
        assert mock_part_store.append_movement.call_args.kwargs["expected_version"] == 3

    async def test_salida_writes_no_expense(self, use_case, mock_finance_store):
        request = StockMovementRequest(type=MovementType.OUT, quantity=15, reason="Mantenimiento")
        result = await use_case.execute(1, request)
        assert result.part.current_stock == 35
        assert result.expense_record is None
        mock_finance_store.create_record.assert_not_called()

    async def test_adjust_sets_absolute_level(self, use_case):
        request = StockMovementRequest(type=MovementType.ADJUST, quantity=40, reason="Inventario")
        result = await use_case.execute(1, request)
        assert result.part.current_stock == 40
        assert result.movement.delta == -10

    async def test_insufficient_stock_nothing_written(self, use_case, mock_part_store):
        request = StockMovementRequest(type=MovementType.OUT, quantity=51, reason="Mantenimiento")
        with pytest.raises(InsufficientStockError):
            await use_case.execute(1, request)
        mock_part_store.append_movement.assert_not_called()

    async def test_part_not_found(self, use_case, mock_part_store):
        mock_part_store.get_part.return_value = None
        request = StockMovementRequest(type=MovementType.IN, quantity=1, reason="Compra")
        with pytest.raises(PartNotFoundError):
            await use_case.execute(404, request)

    async def test_expenses_disabled(self, mock_part_store, mock_finance_store):
        use_case = ApplyStockMovementUseCase(
            part_store=mock_part_store,
            finance_store=mock_finance_store,
            settings=LedgerSettings(record_purchase_expenses=False),
        )
        request = StockMovementRequest(type=MovementType.IN, quantity=2, reason="Compra")
        result = await use_case.execute(1, request)
        assert result.expense_record is None

    async def test_to_response(self, use_case):
        request = StockMovementRequest(type=MovementType.IN, quantity=2, reason="Compra")
        response = use_case.to_response(await use_case.execute(1, request))
        assert response.part.current_stock == 52
        assert response.movement.movement_type == "Entrada"
        assert response.expense_record_id == 5

    async def test_late_entry_expense_falls_in_todays_window(
        self, mock_part_store, mock_finance_store
    ):
        clock = FixedClock(datetime(2024, 3, 15, 23, 30))
        use_case = ApplyStockMovementUseCase(
            part_store=mock_part_store,
            finance_store=mock_finance_store,
            settings=LedgerSettings(),
            clock=clock,
        )
        request = StockMovementRequest(type=MovementType.IN, quantity=2, reason="Compra")
        result = await use_case.execute(1, request)

        assert result.movement.moved_at == clock.now()
        start, end = resolve_period("day", clock.today())
        assert start <= result.expense_record.record_date < end

    async def test_process_clock_used_when_none_injected(self, use_case):
        set_clock(FixedClock(datetime(2024, 7, 1, 0, 15)))
        request = StockMovementRequest(type=MovementType.IN, quantity=2, reason="Compra")
        result = await use_case.execute(1, request)
        assert result.expense_record.record_date == date(2024, 7, 1)

    async def test_conflict_leaves_history_untouched(
        self, use_case, mock_part_store, mock_finance_store
    ):
        mock_part_store.append_movement.side_effect = ConflictError("Part", 1, 3)
        request = StockMovementRequest(type=MovementType.IN, quantity=5, reason="Compra")
        with pytest.raises(ConflictError):
            await use_case.execute(1, request)

        snapshot = mock_part_store.get_part.return_value
        assert snapshot.current_stock == 50
        assert snapshot.movements == []
        mock_part_store.append_movement.assert_awaited_once()
        mock_finance_store.create_record.assert_not_called()

    async def test_non_finite_quantity_never_written(self, use_case, mock_part_store):
        request = StockMovementRequest.model_construct(
            type=MovementType.IN,
            quantity=float("inf"),
            reason="Compra",
            reference=None,
            payment_method=None,
        )
        with pytest.raises(ValidationError):
            await use_case.execute(1, request)
        mock_part_store.append_movement.assert_not_called()
