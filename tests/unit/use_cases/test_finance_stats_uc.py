"""Tests for GetFinanceStatsUseCase."""

from datetime import date, datetime
from unittest.mock import AsyncMock

import pytest

from almacen.application.dto.requests import FinanceStatsRequest
from almacen.application.use_cases.get_finance_stats import GetFinanceStatsUseCase
from almacen.config.settings import QuerySettings
from almacen.core.entities import FinanceRecord, FinanceType
from almacen.core.exceptions import ValidationError
from almacen.infrastructure.clock import FixedClock


def _record(record_date: date, amount: float, type=FinanceType.EXPENSE) -> FinanceRecord:
    return FinanceRecord(
        type=type,
        category="Mantenimiento",
        description="x",
        amount=amount,
        record_date=record_date,
    )


@pytest.fixture
def mock_finance_store():
    store = AsyncMock()
    store.list_records.return_value = [
        _record(date(2024, 2, 28), 100),
        _record(date(2024, 3, 1), 30),
        _record(date(2024, 3, 15), 500, FinanceType.INCOME),
        _record(date(2024, 3, 31), 20),
    ]
    return store


@pytest.fixture
def use_case(mock_finance_store):
    return GetFinanceStatsUseCase(
        finance_store=mock_finance_store,
        clock=FixedClock(datetime(2024, 3, 15, 10, 30)),
        settings=QuerySettings(),
    )


class TestGetFinanceStatsUseCase:
    async def test_default_period_is_month(self, use_case):
        stats = await use_case.execute()
        assert stats.summary.period == "month"
        assert stats.summary.start_date == date(2024, 3, 1)
        assert stats.summary.end_date == date(2024, 4, 1)
        assert stats.summary.total_expenses == 50
        assert stats.summary.total_income == 500
        assert stats.summary.net_income == 450
        assert any(p.month == 2 for p in stats.monthly_trend)

    async def test_day_period(self, use_case):
        stats = await use_case.execute(FinanceStatsRequest(period="day"))
        assert stats.summary.total_income == 500
        assert stats.summary.total_expenses == 0

    async def test_custom_range_inclusive(self, use_case):
        stats = await use_case.execute(
            FinanceStatsRequest(start_date=date(2024, 2, 28), end_date=date(2024, 3, 1))
        )
        assert stats.summary.period == "custom"
        assert stats.summary.total_expenses == 130
        assert stats.summary.end_date == date(2024, 3, 2)

    async def test_half_open_range_rejected(self, use_case):
        with pytest.raises(ValidationError):
            await use_case.execute(FinanceStatsRequest(start_date=date(2024, 3, 1)))

    async def test_unknown_period(self, use_case, mock_finance_store):
        with pytest.raises(ValidationError):
            await use_case.execute(FinanceStatsRequest(period="decade"))
        mock_finance_store.list_records.assert_not_called()

    async def test_to_response(self, use_case):
        response = use_case.to_response(await use_case.execute())
        assert response.expenses_by_category[0].category == "Mantenimiento"
        assert response.monthly_trend[0].type == "Egreso"
