"""Tests for finance record rules."""

from datetime import date, datetime

import pytest

from almacen.core.entities import (
    FinanceRecord,
    FinanceType,
    RecurrenceFrequency,
    RecurringConfig,
)
from almacen.core.exceptions import ValidationError
from almacen.core.services import finance_rules


def _record(**overrides) -> FinanceRecord:
    data = {
        "type": FinanceType.EXPENSE,
        "category": "Seguros",
        "description": "Póliza de flota",
        "amount": 900.0,
        "record_date": date(2024, 1, 31),
    }
    data.update(overrides)
    return FinanceRecord(**data)


class TestNextOccurrence:
    @pytest.mark.parametrize(
        "frequency, expected",
        [
            (RecurrenceFrequency.DAILY, date(2024, 2, 1)),
            (RecurrenceFrequency.WEEKLY, date(2024, 2, 7)),
            (RecurrenceFrequency.BIWEEKLY, date(2024, 2, 15)),
            (RecurrenceFrequency.MONTHLY, date(2024, 2, 29)),
            (RecurrenceFrequency.QUARTERLY, date(2024, 4, 30)),
            (RecurrenceFrequency.SEMIANNUAL, date(2024, 7, 31)),
            (RecurrenceFrequency.ANNUAL, date(2025, 1, 31)),
        ],
    )
    def test_steps(self, frequency, expected):
        assert finance_rules.next_occurrence(date(2024, 1, 31), frequency) == expected

    def test_add_months_crosses_year(self):
        assert finance_rules.add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)


class TestPrepareRecord:
    def test_strips_text_and_empty_tags(self):
        record = finance_rules.prepare_record(
            _record(category=" Seguros ", description=" Póliza ", tags=[" flota ", "", "  "])
        )
        assert record.category == "Seguros"
        assert record.description == "Póliza"
        assert record.tags == ["flota"]

    @pytest.mark.parametrize("amount", [0, -10])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            finance_rules.prepare_record(_record(amount=amount))
        assert exc_info.value.details["field"] == "amount"

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_amount_rejected(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            finance_rules.prepare_record(_record(amount=amount))
        assert exc_info.value.details["field"] == "amount"

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError):
            finance_rules.prepare_record(_record(description="  "))

    def test_non_recurring_drops_schedule(self):
        record = finance_rules.prepare_record(
            _record(recurring_config=RecurringConfig(frequency=RecurrenceFrequency.MONTHLY))
        )
        assert record.recurring_config is None

    def test_recurring_needs_frequency(self):
        with pytest.raises(ValidationError) as exc_info:
            finance_rules.prepare_record(_record(is_recurring=True))
        assert exc_info.value.details["field"] == "recurring_config.frequency"

    def test_recurring_derives_next_date(self):
        record = finance_rules.prepare_record(
            _record(
                is_recurring=True,
                recurring_config=RecurringConfig(frequency=RecurrenceFrequency.MONTHLY),
            )
        )
        assert record.recurring_config.next_date == date(2024, 2, 29)

    def test_end_before_next_rejected(self):
        with pytest.raises(ValidationError):
            finance_rules.prepare_record(
                _record(
                    is_recurring=True,
                    recurring_config=RecurringConfig(
                        frequency=RecurrenceFrequency.WEEKLY, end_date=date(2024, 2, 1)
                    ),
                )
            )


class TestApplyPatch:
    def test_changes_amount(self, sample_record):
        updated = finance_rules.apply_patch(sample_record, {"amount": 350.0})
        assert updated.amount == 350.0
        assert updated.id == sample_record.id

    def test_patch_enabling_recurrence(self, sample_record):
        updated = finance_rules.apply_patch(
            sample_record,
            {"is_recurring": True, "recurring_config": {"frequency": "Semanal"}},
        )
        assert updated.recurring_config.next_date == date(2024, 3, 22)

    def test_required_field_cannot_be_cleared(self, sample_record):
        with pytest.raises(ValidationError):
            finance_rules.apply_patch(sample_record, {"amount": None})

    def test_unknown_field_rejected(self, sample_record):
        with pytest.raises(ValidationError):
            finance_rules.apply_patch(sample_record, {"id": 5})

    def test_invalid_amount_rejected(self, sample_record):
        with pytest.raises(ValidationError):
            finance_rules.apply_patch(sample_record, {"amount": 0})

    def test_updated_at_taken_from_caller(self, sample_record):
        now = datetime(2024, 3, 20, 18, 45)
        updated = finance_rules.apply_patch(sample_record, {"notes": "Factura 0091"}, now=now)
        assert updated.updated_at == now
