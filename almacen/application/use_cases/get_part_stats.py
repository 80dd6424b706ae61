"""Part Stats Use Case."""

from almacen.application.dto.converters import part_stats_to_response
from almacen.application.dto.responses import PartStatsResponse
from almacen.config import get_logger
from almacen.core.entities import PartFilter, PartStats
from almacen.core.interfaces import IPartStore
from almacen.core.services import QueryFilterService, part_stats

logger = get_logger(__name__)


class GetPartStatsUseCase:
    """Aggregate every part matching the filter; paging is ignored."""

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

    async def execute(self, criteria: PartFilter | None = None) -> PartStats:
        criteria = criteria or PartFilter()
        store = await self._get_part_store()
        parts = await store.list_parts(
            warehouse_id=criteria.warehouse_id, category=criteria.category
        )
        stats = part_stats(self._get_query_service().select_parts(parts, criteria))
        logger.debug(
            "part_stats_computed",
            total_parts=stats.total_parts,
            low_stock_parts=stats.low_stock_parts,
            out_of_stock_parts=stats.out_of_stock_parts,
        )
        return stats

    def to_response(self, stats: PartStats) -> PartStatsResponse:
        return part_stats_to_response(stats)
