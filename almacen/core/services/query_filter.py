"""
Query/filter layer.

Turns filter criteria into a deterministic, ordered subset of a
record snapshot. All criteria combine with AND; a criterion left as None
does not constrain. Ordering is most recent business date first, with
ties kept in insertion order. Pagination happens last and the reported
total counts every match.
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import TypeVar

from almacen.config.settings import QuerySettings
from almacen.core.entities.finance import FinanceRecord
from almacen.core.entities.part import Part
from almacen.core.entities.query import FinanceFilter, Page, PartFilter
from almacen.core.exceptions import ValidationError

T = TypeVar("T")


def _contains(needle: str, *haystacks: str | None) -> bool:
    folded = needle.casefold()
    return any(h is not None and folded in h.casefold() for h in haystacks)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _in_range(value: date, start: date | None, end: date | None) -> bool:
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


class QueryFilterService:
    """Selects, orders and pages parts and finance records."""

    def __init__(self, defaults: QuerySettings | None = None) -> None:
        self._defaults = defaults or QuerySettings()

    @property
    def defaults(self) -> QuerySettings:
        return self._defaults

    def resolve_paging(self, page: int | None, limit: int | None) -> tuple[int, int]:
        """Fill in default paging and reject out-of-range values."""
        page = self._defaults.default_page if page is None else page
        limit = self._defaults.default_limit if limit is None else limit
        if page < 1:
            raise ValidationError("page", "Page must be >= 1", page)
        if limit <= 0:
            raise ValidationError("limit", "Limit must be greater than zero", limit)
        if limit > self._defaults.max_limit:
            raise ValidationError(
                "limit", f"Limit cannot exceed {self._defaults.max_limit}", limit
            )
        return page, limit

    @staticmethod
    def _check_range(start: date | None, end: date | None) -> None:
        if start is not None and end is not None and start > end:
            raise ValidationError("start_date", "Start date is after end date", start)

    # Parts

    @staticmethod
    def part_matches(part: Part, criteria: PartFilter) -> bool:
        if criteria.category is not None and part.category != criteria.category:
            return False
        if criteria.warehouse_id is not None and part.warehouse_id != criteria.warehouse_id:
            return False
        if criteria.stock_status is not None and part.status != criteria.stock_status:
            return False
        if not _in_range(_as_date(part.created_at), criteria.start_date, criteria.end_date):
            return False
        if criteria.search:
            supplier_name = part.supplier.name if part.supplier else None
            if not _contains(
                criteria.search,
                part.name,
                part.part_number,
                part.description,
                supplier_name,
            ):
                return False
        return True

    def select_parts(self, parts: Iterable[Part], criteria: PartFilter) -> list[Part]:
        """Every matching part in listing order, unpaged."""
        self._check_range(criteria.start_date, criteria.end_date)
        matched = [p for p in parts if self.part_matches(p, criteria)]
        return _newest_first(matched, lambda p: p.created_at)

    def page_parts(self, parts: Iterable[Part], criteria: PartFilter) -> Page[Part]:
        page, limit = self.resolve_paging(criteria.page, criteria.limit)
        return _paginate(self.select_parts(parts, criteria), page, limit)

    # Finance records

    @staticmethod
    def record_matches(record: FinanceRecord, criteria: FinanceFilter) -> bool:
        if criteria.type is not None and record.type != criteria.type:
            return False
        if criteria.category is not None and record.category != criteria.category:
            return False
        if (
            criteria.payment_method is not None
            and record.payment_method != criteria.payment_method
        ):
            return False
        if not _in_range(record.record_date, criteria.start_date, criteria.end_date):
            return False
        if criteria.search and not _contains(
            criteria.search,
            record.description,
            record.category,
            record.subcategory,
            record.reference,
            record.notes,
        ):
            return False
        return True

    def select_records(
        self, records: Iterable[FinanceRecord], criteria: FinanceFilter
    ) -> list[FinanceRecord]:
        self._check_range(criteria.start_date, criteria.end_date)
        matched = [r for r in records if self.record_matches(r, criteria)]
        return _newest_first(matched, lambda r: r.record_date)

    def page_records(
        self, records: Iterable[FinanceRecord], criteria: FinanceFilter
    ) -> Page[FinanceRecord]:
        page, limit = self.resolve_paging(criteria.page, criteria.limit)
        return _paginate(self.select_records(records, criteria), page, limit)


def _newest_first(items: list[T], key: Callable[[T], date | datetime]) -> list[T]:
    # sorted() is stable with reverse=True, so equal dates keep input order
    return sorted(items, key=key, reverse=True)


def _paginate(items: list[T], page: int, limit: int) -> Page[T]:
    start = (page - 1) * limit
    return Page(items=items[start : start + limit], total=len(items), page=page, limit=limit)
