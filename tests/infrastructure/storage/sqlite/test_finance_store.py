"""Tests for SQLite finance record store."""

from datetime import date

import pytest

from almacen.core.entities import (
    FinanceRecord,
    FinanceType,
    PaymentMethod,
    RecurrenceFrequency,
    RecurringConfig,
)
from almacen.core.exceptions import ConflictError, DatabaseError, FinanceRecordNotFoundError
from almacen.infrastructure.storage.sqlite import SQLiteFinanceStore
from almacen.infrastructure.storage.sqlite.connection import get_transaction


@pytest.fixture
def store(initialized_db) -> SQLiteFinanceStore:
    return SQLiteFinanceStore()


def _record(**overrides) -> FinanceRecord:
    data = {
        "type": FinanceType.EXPENSE,
        "category": "Combustible",
        "subcategory": "Diesel",
        "description": "Diesel excavadora",
        "amount": 320.0,
        "record_date": date(2024, 3, 15),
        "payment_method": PaymentMethod.YAPE,
        "tags": ["obra", "flota"],
    }
    data.update(overrides)
    return FinanceRecord(**data)


class TestFinanceStore:
    async def test_round_trip(self, store):
        created = await store.create_record(
            _record(
                is_recurring=True,
                recurring_config=RecurringConfig(
                    frequency=RecurrenceFrequency.MONTHLY, next_date=date(2024, 4, 15)
                ),
            )
        )
        fetched = await store.get_record(created.id)
        assert fetched.tags == ["obra", "flota"]
        assert fetched.payment_method == PaymentMethod.YAPE
        assert fetched.record_date == date(2024, 3, 15)
        assert fetched.recurring_config.frequency == RecurrenceFrequency.MONTHLY
        assert fetched.recurring_config.next_date == date(2024, 4, 15)

    async def test_non_recurring_has_no_config(self, store):
        created = await store.create_record(_record())
        assert (await store.get_record(created.id)).recurring_config is None

    async def test_update_and_conflict(self, store):
        created = await store.create_record(_record())
        changed = created.model_copy(update={"amount": 400.0})
        updated = await store.update_record(changed, expected_version=0)
        assert updated.version == 1
        assert (await store.get_record(created.id)).amount == 400.0

        with pytest.raises(ConflictError):
            await store.update_record(changed, expected_version=0)

    async def test_update_missing(self, store):
        with pytest.raises(FinanceRecordNotFoundError):
            await store.update_record(_record(id=777), expected_version=0)

    async def test_delete(self, store):
        created = await store.create_record(_record())
        assert await store.delete_record(created.id) is True
        assert await store.get_record(created.id) is None
        assert await store.delete_record(created.id) is False

    async def test_list_by_type(self, store):
        await store.create_record(_record())
        await store.create_record(
            _record(type=FinanceType.INCOME, category="Alquileres", subcategory=None)
        )
        assert len(await store.list_records()) == 2
        incomes = await store.list_records(type=FinanceType.INCOME)
        assert [r.category for r in incomes] == ["Alquileres"]

    async def test_categories_group_subcategories(self, store):
        await store.create_record(_record(subcategory="Diesel"))
        await store.create_record(_record(subcategory="Gasolina"))
        await store.create_record(_record(subcategory="Diesel"))
        await store.create_record(_record(category="Seguros", subcategory=None))

        categories = {c.category: c.subcategories for c in await store.list_categories()}
        assert sorted(categories["Combustible"]) == ["Diesel", "Gasolina"]
        assert categories["Seguros"] == []

    async def test_unreadable_record_date_raises(self, store):
        created = await store.create_record(_record())
        async with get_transaction() as conn:
            await conn.execute(
                "UPDATE finance_records SET record_date = '15/03/2024' WHERE id = ?",
                (created.id,),
            )

        with pytest.raises(DatabaseError, match="record_date"):
            await store.get_record(created.id)
