"""Finance Stats Use Case: period window summary plus monthly trend."""

from almacen.application.dto.converters import finance_stats_to_response
from almacen.application.dto.requests import FinanceStatsRequest
from almacen.application.dto.responses import FinanceStatsResponse
from almacen.config import get_logger
from almacen.config.settings import QuerySettings
from almacen.core.entities import FinanceStats
from almacen.core.exceptions import ValidationError
from almacen.core.interfaces import IClock, IFinanceStore
from almacen.core.services import explicit_window, finance_stats, resolve_period

logger = get_logger(__name__)

CUSTOM_PERIOD = "custom"


class GetFinanceStatsUseCase:
    """
    Resolve the stats window and aggregate finance records.

    A period token is resolved against the injected clock. When both
    start_date and end_date are given they replace the token's window
    with the inclusive range, and the summary reports period "custom".
    """

    def __init__(
        self,
        finance_store: IFinanceStore | None = None,
        clock: IClock | None = None,
        settings: QuerySettings | None = None,
    ):
        self._finance_store = finance_store
        self._clock = clock
        self._settings = settings

    async def _get_finance_store(self) -> IFinanceStore:
        if self._finance_store is None:
            from almacen.infrastructure.storage.sqlite import get_finance_store

            self._finance_store = await get_finance_store()
        return self._finance_store

    def _get_clock(self) -> IClock:
        if self._clock is None:
            from almacen.application.services import get_clock

            self._clock = get_clock()
        return self._clock

    def _get_settings(self) -> QuerySettings:
        if self._settings is None:
            from almacen.config import get_settings

            self._settings = get_settings().query
        return self._settings

    async def execute(self, request: FinanceStatsRequest | None = None) -> FinanceStats:
        request = request or FinanceStatsRequest()
        period = request.period or self._get_settings().default_period

        # Validate the token even when a custom range overrides it
        start, end = resolve_period(period, self._get_clock().today())

        if request.start_date is not None or request.end_date is not None:
            if request.start_date is None or request.end_date is None:
                raise ValidationError(
                    "start_date" if request.start_date is None else "end_date",
                    "A custom range needs both start_date and end_date",
                )
            start, end = explicit_window(request.start_date, request.end_date)
            period = CUSTOM_PERIOD

        store = await self._get_finance_store()
        records = await store.list_records()
        stats = finance_stats(records, start, end, period)

        logger.debug(
            "finance_stats_computed",
            period=period,
            start=start.isoformat(),
            end=end.isoformat(),
            records=len(records),
        )
        return stats

    def to_response(self, stats: FinanceStats) -> FinanceStatsResponse:
        return finance_stats_to_response(stats)
