"""List Parts Use Case: filtered, ordered, paged part listing."""

from almacen.application.dto.converters import part_to_response
from almacen.application.dto.responses import PartListResponse
from almacen.core.entities import Page, Part, PartFilter
from almacen.core.interfaces import IPartStore
from almacen.core.services import QueryFilterService


class ListPartsUseCase:
    """
    Select parts through the query layer.

    warehouse and category are pushed down to the store; every other
    criterion, the ordering and the paging happen in QueryFilterService.
    """

    def __init__(
        self,
        part_store: IPartStore | None = None,
        query_service: QueryFilterService | None = None,
    ):
        self._part_store = part_store
        self._query_service = query_service

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from almacen.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    def _get_query_service(self) -> QueryFilterService:
        if self._query_service is None:
            from almacen.application.services import get_query_service

            self._query_service = get_query_service()
        return self._query_service

    async def execute(self, criteria: PartFilter) -> Page[Part]:
        query = self._get_query_service()
        # Reject bad paging before touching storage
        query.resolve_paging(criteria.page, criteria.limit)

        store = await self._get_part_store()
        parts = await store.list_parts(
            warehouse_id=criteria.warehouse_id, category=criteria.category
        )
        return query.page_parts(parts, criteria)

    def to_response(self, page: Page[Part]) -> PartListResponse:
        return PartListResponse(
            items=[part_to_response(p) for p in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
            count=page.count,
        )
