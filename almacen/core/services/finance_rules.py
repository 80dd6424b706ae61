"""
Finance record rules.

Validation and normalization only. Recurring schedules are stored for
external schedulers; nothing here creates future records.
"""

import calendar
import math
from datetime import date, datetime, timedelta
from typing import Any

from almacen.core.entities.finance import (
    FinanceRecord,
    RecurrenceFrequency,
    RecurringConfig,
)
from almacen.core.exceptions import ValidationError

_DAY_STEPS = {
    RecurrenceFrequency.DAILY: 1,
    RecurrenceFrequency.WEEKLY: 7,
    RecurrenceFrequency.BIWEEKLY: 15,
}

_MONTH_STEPS = {
    RecurrenceFrequency.MONTHLY: 1,
    RecurrenceFrequency.QUARTERLY: 3,
    RecurrenceFrequency.SEMIANNUAL: 6,
    RecurrenceFrequency.ANNUAL: 12,
}

UPDATABLE_FIELDS = frozenset(
    {
        "type",
        "category",
        "subcategory",
        "description",
        "amount",
        "record_date",
        "payment_method",
        "reference",
        "notes",
        "tags",
        "source_type",
        "source_id",
        "is_recurring",
        "recurring_config",
    }
)

REQUIRED_FIELDS = frozenset(
    {
        "type",
        "category",
        "description",
        "amount",
        "record_date",
        "payment_method",
        "source_type",
        "is_recurring",
    }
)


def add_months(start: date, months: int) -> date:
    """Shift by calendar months, clamping to the last day of the month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def next_occurrence(start: date, frequency: RecurrenceFrequency) -> date:
    """Date of the occurrence after start."""
    if frequency in _DAY_STEPS:
        return start + timedelta(days=_DAY_STEPS[frequency])
    return add_months(start, _MONTH_STEPS[frequency])


def validate_record(record: FinanceRecord) -> None:
    """Raise ValidationError if the record breaks a finance rule."""
    if not math.isfinite(record.amount):
        raise ValidationError("amount", "Amount must be a finite number", str(record.amount))
    if record.amount <= 0:
        raise ValidationError("amount", "Amount must be a positive number", record.amount)
    if not record.description or not record.description.strip():
        raise ValidationError("description", "Description is required")
    if not record.category or not record.category.strip():
        raise ValidationError("category", "Category is required")

    if record.is_recurring:
        config = record.recurring_config
        if config is None or config.frequency is None:
            raise ValidationError(
                "recurring_config.frequency",
                "Frequency is required for recurring records",
            )
        if (
            config.end_date is not None
            and config.next_date is not None
            and config.end_date < config.next_date
        ):
            raise ValidationError(
                "recurring_config.end_date",
                "End date cannot be before the next occurrence",
                config.end_date,
            )


def prepare_record(record: FinanceRecord) -> FinanceRecord:
    """
    Validate and normalize a record before it is stored.

    Non-recurring records drop any schedule; recurring ones get next_date
    derived from the record date when the caller left it out.
    """
    record = record.model_copy(
        update={
            "category": record.category.strip() if record.category else record.category,
            "description": (
                record.description.strip() if record.description else record.description
            ),
            "tags": [t.strip() for t in record.tags if t and t.strip()],
        }
    )

    if not record.is_recurring:
        record = record.model_copy(update={"recurring_config": None})
    elif record.recurring_config is not None and record.recurring_config.frequency:
        config = record.recurring_config
        if config.next_date is None:
            config = config.model_copy(
                update={"next_date": next_occurrence(record.record_date, config.frequency)}
            )
            record = record.model_copy(update={"recurring_config": config})

    validate_record(record)
    return record


def apply_patch(
    record: FinanceRecord, patch: dict[str, Any], now: datetime | None = None
) -> FinanceRecord:
    """Merge caller edits into a record and re-run the rules."""
    unknown = sorted(set(patch) - UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(unknown[0], "Field cannot be updated")
    for field in sorted(REQUIRED_FIELDS & set(patch)):
        if patch[field] is None:
            raise ValidationError(field, "Field cannot be cleared")

    changes = dict(patch)
    if "tags" in changes and changes["tags"] is None:
        changes["tags"] = []
    config = changes.get("recurring_config")
    if isinstance(config, dict):
        changes["recurring_config"] = RecurringConfig(**config)
    changes["updated_at"] = now or datetime.now()

    return prepare_record(record.model_copy(update=changes))
