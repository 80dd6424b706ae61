"""Update Finance Record Use Case."""

from almacen.application.dto.converters import record_to_response
from almacen.application.dto.requests import UpdateFinanceRecordRequest
from almacen.application.dto.responses import FinanceRecordResponse
from almacen.config import get_logger
from almacen.core.entities import FinanceRecord
from almacen.core.exceptions import FinanceRecordNotFoundError
from almacen.core.interfaces import IClock, IFinanceStore
from almacen.core.services import finance_rules

logger = get_logger(__name__)


class UpdateFinanceRecordUseCase:
    """Merge a partial update into a record and re-validate it."""

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

    async def execute(
        self, record_id: int, request: UpdateFinanceRecordRequest
    ) -> FinanceRecord:
        store = await self._get_finance_store()
        record = await store.get_record(record_id)
        if record is None:
            raise FinanceRecordNotFoundError(record_id)

        patch = request.model_dump(exclude_unset=True)
        updated = finance_rules.apply_patch(record, patch, now=self._get_clock().now())
        updated = await store.update_record(updated, expected_version=record.version)

        logger.info("update_finance_record_complete", record_id=record_id, fields=sorted(patch))
        return updated

    def to_response(self, record: FinanceRecord) -> FinanceRecordResponse:
        return record_to_response(record)
