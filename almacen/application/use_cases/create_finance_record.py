"""Create Finance Record Use Case."""

from almacen.application.dto.converters import record_to_response
from almacen.application.dto.requests import CreateFinanceRecordRequest
from almacen.application.dto.responses import FinanceRecordResponse
from almacen.config import get_logger
from almacen.core.entities import FinanceRecord, RecurringConfig
from almacen.core.interfaces import IClock, IFinanceStore
from almacen.core.services import finance_rules

logger = get_logger(__name__)


class CreateFinanceRecordUseCase:
    """Validate and store an income or expense record."""

    def __init__(
        self,
        finance_store: IFinanceStore | None = None,
        clock: IClock | None = None,
    ):
        self._finance_store = finance_store
        self._clock = clock

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

    async def execute(self, request: CreateFinanceRecordRequest) -> FinanceRecord:
        data = request.model_dump(exclude={"recurring_config"})
        config = None
        if request.recurring_config is not None:
            config = RecurringConfig(**request.recurring_config.model_dump())

        now = self._get_clock().now()
        record = FinanceRecord(
            **data,
            recurring_config=config,
            created_at=now,
            updated_at=now,
        )
        record = finance_rules.prepare_record(record)

        store = await self._get_finance_store()
        record = await store.create_record(record)
        logger.info(
            "create_finance_record_complete",
            record_id=record.id,
            type=record.type.value,
            is_recurring=record.is_recurring,
        )
        return record

    def to_response(self, record: FinanceRecord) -> FinanceRecordResponse:
        return record_to_response(record)
