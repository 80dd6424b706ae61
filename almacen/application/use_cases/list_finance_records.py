"""Finance record reads: single record, filtered listing, categories."""

from dataclasses import dataclass, field

from almacen.application.dto.converters import record_to_response
from almacen.application.dto.responses import (
    CategoryUsageResponse,
    FinanceCategoriesResponse,
    FinanceRecordListResponse,
    FinanceRecordResponse,
)
from almacen.core.entities import (
    RECOMMENDED_CATEGORIES,
    CategoryUsage,
    FinanceFilter,
    FinanceRecord,
    FinanceType,
    Page,
)
from almacen.core.exceptions import FinanceRecordNotFoundError
from almacen.core.interfaces import IFinanceStore
from almacen.core.services import QueryFilterService


class _FinanceStoreMixin:
    _finance_store: IFinanceStore | None

    async def _get_finance_store(self) -> IFinanceStore:
        if self._finance_store is None:
            from almacen.infrastructure.storage.sqlite import get_finance_store

            self._finance_store = await get_finance_store()
        return self._finance_store


class GetFinanceRecordUseCase(_FinanceStoreMixin):
    def __init__(self, finance_store: IFinanceStore | None = None):
        self._finance_store = finance_store

    async def execute(self, record_id: int) -> FinanceRecord:
        store = await self._get_finance_store()
        record = await store.get_record(record_id)
        if record is None:
            raise FinanceRecordNotFoundError(record_id)
        return record

    def to_response(self, record: FinanceRecord) -> FinanceRecordResponse:
        return record_to_response(record)


class ListFinanceRecordsUseCase(_FinanceStoreMixin):
    """Filtered listing, most recent record date first."""

    def __init__(
        self,
        finance_store: IFinanceStore | None = None,
        query_service: QueryFilterService | None = None,
    ):
        self._finance_store = finance_store
        self._query_service = query_service

    def _get_query_service(self) -> QueryFilterService:
        if self._query_service is None:
            from almacen.application.services import get_query_service

            self._query_service = get_query_service()
        return self._query_service

    async def execute(self, criteria: FinanceFilter) -> Page[FinanceRecord]:
        query = self._get_query_service()
        query.resolve_paging(criteria.page, criteria.limit)

        store = await self._get_finance_store()
        records = await store.list_records(type=criteria.type)
        return query.page_records(records, criteria)

    def to_response(self, page: Page[FinanceRecord]) -> FinanceRecordListResponse:
        return FinanceRecordListResponse(
            items=[record_to_response(r) for r in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
            count=page.count,
        )


@dataclass
class FinanceCategoriesResult:
    """Categories in use and the recommended lists per type."""

    categories: list[CategoryUsage]
    recommended: dict[FinanceType, list[str]] = field(default_factory=dict)


class ListFinanceCategoriesUseCase(_FinanceStoreMixin):
    """Distinct categories with subcategories, plus recommendations."""

    def __init__(self, finance_store: IFinanceStore | None = None):
        self._finance_store = finance_store

    async def execute(self, type: FinanceType | None = None) -> FinanceCategoriesResult:
        store = await self._get_finance_store()
        categories = await store.list_categories(type=type)
        if type is None:
            recommended = dict(RECOMMENDED_CATEGORIES)
        else:
            recommended = {type: RECOMMENDED_CATEGORIES[type]}
        return FinanceCategoriesResult(categories=categories, recommended=recommended)

    def to_response(self, result: FinanceCategoriesResult) -> FinanceCategoriesResponse:
        return FinanceCategoriesResponse(
            categories=[
                CategoryUsageResponse(category=c.category, subcategories=c.subcategories)
                for c in result.categories
            ],
            recommended_categories={t.value: list(c) for t, c in result.recommended.items()},
        )
