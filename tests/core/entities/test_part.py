"""Tests for part entities and the derived stock status."""

import pytest

from almacen.core.entities import (
    MovementType,
    Part,
    StockMovement,
    StockStatus,
    stock_status,
)


class TestStockStatus:
    @pytest.mark.parametrize(
        "current, minimum, expected",
        [
            (0, 5, StockStatus.OUT_OF_STOCK),
            (0, 0, StockStatus.OUT_OF_STOCK),
            (5, 5, StockStatus.LOW_STOCK),
            (3, 5, StockStatus.LOW_STOCK),
            (6, 5, StockStatus.NORMAL),
            (1, 0, StockStatus.NORMAL),
        ],
    )
    def test_classification(self, current, minimum, expected):
        assert stock_status(current, minimum) == expected

    def test_zero_stock_wins_over_threshold(self):
        part = Part(name="Correa", part_number="C-1", warehouse_id=1, current_stock=0, minimum_stock=5)
        assert part.status == StockStatus.OUT_OF_STOCK


class TestPart:
    def test_defaults(self):
        part = Part(name="Correa", part_number="C-1", warehouse_id=1)
        assert part.current_stock == 0
        assert part.minimum_stock == 1
        assert part.movements == []
        assert part.version == 0

    def test_stock_value(self, sample_part):
        assert sample_part.stock_value == 50 * 12.5

    def test_stock_value_without_price(self):
        part = Part(name="Correa", part_number="C-1", warehouse_id=1, current_stock=10)
        assert part.stock_value == 0


class TestStockMovement:
    def test_delta(self):
        movement = StockMovement(
            movement_type=MovementType.OUT,
            quantity=15,
            reason="Mantenimiento",
            previous_stock=70,
            new_stock=55,
        )
        assert movement.delta == -15

    def test_frozen(self):
        movement = StockMovement(
            movement_type=MovementType.IN, quantity=1, reason="x", previous_stock=0, new_stock=1
        )
        with pytest.raises(Exception):
            movement.quantity = 2
