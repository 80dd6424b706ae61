"""
Stats aggregator.

Read-only folds over a snapshot that the query layer has already narrowed.
Empty input gives zero counts and totals, never an error.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from almacen.core.entities.finance import FinanceRecord, FinanceType
from almacen.core.entities.part import Part, StockStatus
from almacen.core.entities.stats import (
    CategoryAmount,
    CategoryStockSummary,
    FinanceStats,
    FinanceSummary,
    MonthlyTrendPoint,
    PartStats,
)
from almacen.core.exceptions import ValidationError

PERIOD_TOKENS = ("day", "week", "month", "year")


def resolve_period(token: str, today: date) -> tuple[date, date]:
    """
    Resolve a period token to a half-open [start, end) date window.

    Weeks start on Monday; months and years are calendar aligned.
    """
    if token == "day":
        return today, today + timedelta(days=1)
    if token == "week":
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=7)
    if token == "month":
        start = today.replace(day=1)
        if start.month == 12:
            return start, date(start.year + 1, 1, 1)
        return start, date(start.year, start.month + 1, 1)
    if token == "year":
        return date(today.year, 1, 1), date(today.year + 1, 1, 1)
    raise ValidationError(
        "period", f"Unknown period; expected one of {', '.join(PERIOD_TOKENS)}", token
    )


def explicit_window(start_date: date, end_date: date) -> tuple[date, date]:
    """Turn an inclusive [start, end] date override into a half-open window."""
    if start_date > end_date:
        raise ValidationError("start_date", "Start date is after end date", start_date)
    return start_date, end_date + timedelta(days=1)


def part_stats(parts: Iterable[Part]) -> PartStats:
    """Counts, stock value and per-category breakdown."""
    stats = PartStats()
    by_category: dict[str, CategoryStockSummary] = {}

    for part in parts:
        status = part.status
        stats.total_parts += 1
        if status == StockStatus.LOW_STOCK:
            stats.low_stock_parts += 1
        elif status == StockStatus.OUT_OF_STOCK:
            stats.out_of_stock_parts += 1
        stats.total_value += part.stock_value

        key = part.category.value
        bucket = by_category.setdefault(key, CategoryStockSummary(category=key))
        bucket.count += 1
        bucket.total_stock += part.current_stock
        if status != StockStatus.NORMAL:
            bucket.low_stock += 1

    stats.parts_by_category = sorted(
        by_category.values(), key=lambda c: (-c.count, c.category)
    )
    return stats


def _by_category(records: list[FinanceRecord]) -> list[CategoryAmount]:
    buckets: dict[str, CategoryAmount] = {}
    for record in records:
        bucket = buckets.setdefault(record.category, CategoryAmount(category=record.category))
        bucket.total += record.amount
        bucket.count += 1
    return sorted(buckets.values(), key=lambda c: (-c.total, c.category))


def monthly_trend(records: Iterable[FinanceRecord]) -> list[MonthlyTrendPoint]:
    """Sum amounts per (year, month, type), oldest month first."""
    buckets: dict[tuple[int, int, str], MonthlyTrendPoint] = {}
    for record in records:
        key = (record.record_date.year, record.record_date.month, record.type.value)
        point = buckets.get(key)
        if point is None:
            point = MonthlyTrendPoint(
                year=record.record_date.year,
                month=record.record_date.month,
                type=record.type,
            )
            buckets[key] = point
        point.total += record.amount
    return [buckets[k] for k in sorted(buckets)]


def finance_stats(
    records: Iterable[FinanceRecord],
    start: date,
    end: date,
    period: str,
) -> FinanceStats:
    """
    Summarize records inside [start, end) and trend all of them.

    The monthly trend ignores the window so charts can span months.
    """
    records = list(records)
    in_window = [r for r in records if start <= r.record_date < end]
    income = [r for r in in_window if r.type == FinanceType.INCOME]
    expenses = [r for r in in_window if r.type == FinanceType.EXPENSE]

    total_income = sum(r.amount for r in income)
    total_expenses = sum(r.amount for r in expenses)

    return FinanceStats(
        summary=FinanceSummary(
            total_income=total_income,
            total_expenses=total_expenses,
            net_income=total_income - total_expenses,
            period=period,
            start_date=start,
            end_date=end,
        ),
        income_by_category=_by_category(income),
        expenses_by_category=_by_category(expenses),
        monthly_trend=monthly_trend(records),
    )
