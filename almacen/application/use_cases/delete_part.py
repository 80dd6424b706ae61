"""Delete Part Use Case."""

from almacen.config import get_logger
from almacen.core.exceptions import PartNotFoundError
from almacen.core.interfaces import IPartStore

logger = get_logger(__name__)


class DeletePartUseCase:
    """Remove a part together with its movement history."""

    def __init__(self, part_store: IPartStore | None = None):
        self._part_store = part_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from almacen.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def execute(self, part_id: int) -> None:
        store = await self._get_part_store()
        if not await store.delete_part(part_id):
            raise PartNotFoundError(part_id)
        logger.info("delete_part_complete", part_id=part_id)
