"""Delete Finance Record Use Case."""

from almacen.config import get_logger
from almacen.core.exceptions import FinanceRecordNotFoundError
from almacen.core.interfaces import IFinanceStore

logger = get_logger(__name__)


class DeleteFinanceRecordUseCase:
    """Delete one record; no projected occurrences exist to cascade to."""

    def __init__(self, finance_store: IFinanceStore | None = None):
        self._finance_store = finance_store

    async def _get_finance_store(self) -> IFinanceStore:
        if self._finance_store is None:
            from almacen.infrastructure.storage.sqlite import get_finance_store

            self._finance_store = await get_finance_store()
        return self._finance_store

    async def execute(self, record_id: int) -> None:
        store = await self._get_finance_store()
        if not await store.delete_record(record_id):
            raise FinanceRecordNotFoundError(record_id)
        logger.info("delete_finance_record_complete", record_id=record_id)
