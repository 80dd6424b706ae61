"""Tests for finance entities and filter/page models."""

from datetime import date

from almacen.core.entities import (
    RECOMMENDED_CATEGORIES,
    FinanceRecord,
    FinanceType,
    Page,
    PaymentMethod,
    SourceType,
)


class TestFinanceRecord:
    def test_defaults(self):
        record = FinanceRecord(
            type=FinanceType.INCOME,
            category="Alquileres",
            description="Alquiler de grúa",
            amount=1500,
            record_date=date(2024, 3, 2),
        )
        assert record.payment_method == PaymentMethod.CASH
        assert record.source_type == SourceType.MANUAL
        assert record.tags == []
        assert record.is_recurring is False

    def test_signed_amount(self, sample_record):
        assert sample_record.signed_amount == -320.0
        income = sample_record.model_copy(update={"type": FinanceType.INCOME})
        assert income.signed_amount == 320.0

    def test_purchase_category_recommended(self):
        assert "Compra de Repuestos" in RECOMMENDED_CATEGORIES[FinanceType.EXPENSE]


class TestPage:
    def test_pages_rounds_up(self):
        page = Page(items=[1, 2, 3, 4, 5], total=45, page=3, limit=20)
        assert page.pages == 3
        assert page.count == 5

    def test_empty(self):
        page = Page(items=[], total=0, page=1, limit=20)
        assert page.pages == 0
        assert page.count == 0
