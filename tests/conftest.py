"""Pytest configuration and fixtures."""

import os
import tempfile
from datetime import date, datetime

# Keep settings-driven side effects (data dir, sqlite file) out of the repo
os.environ.setdefault("STORAGE_DATA_DIR", tempfile.mkdtemp(prefix="almacen-test-"))

import pytest

from almacen.application.services import reset_services
from almacen.config import reset_settings
from almacen.core.entities import (
    FinanceRecord,
    FinanceType,
    MovementType,
    Part,
    PartCategory,
    PaymentMethod,
    StockMovement,
    Supplier,
    Warehouse,
)
from almacen.infrastructure.clock import set_clock


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Fresh settings, services and clock for every test."""
    yield
    reset_settings()
    reset_services()
    set_clock(None)


@pytest.fixture
def sample_warehouse() -> Warehouse:
    return Warehouse(id=1, name="Almacén Central", address="Av. Industrial 120", department="Lima")


@pytest.fixture
def sample_part() -> Part:
    """A stocked part with its opening movement."""
    opened = datetime(2024, 3, 1, 9, 0)
    return Part(
        id=1,
        name="Filtro de aceite",
        part_number="FLT-0042",
        category=PartCategory.FILTERS,
        warehouse_id=1,
        current_stock=50,
        minimum_stock=5,
        unit_price=12.5,
        supplier=Supplier(name="Repuestos Andinos", phone="999-111-222"),
        movements=[
            StockMovement(
                id=1,
                part_id=1,
                movement_type=MovementType.IN,
                quantity=50,
                reason="Stock inicial",
                previous_stock=0,
                new_stock=50,
                moved_at=opened,
            )
        ],
        created_at=opened,
        updated_at=opened,
    )


@pytest.fixture
def sample_record() -> FinanceRecord:
    return FinanceRecord(
        id=1,
        type=FinanceType.EXPENSE,
        category="Combustible",
        description="Diesel para excavadora",
        amount=320.0,
        record_date=date(2024, 3, 15),
        payment_method=PaymentMethod.CASH,
    )
