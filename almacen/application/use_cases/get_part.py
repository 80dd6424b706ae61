"""Part read use cases: one part with history, or its movements page."""

from almacen.application.dto.converters import movement_to_response, part_to_response
from almacen.application.dto.responses import MovementListResponse, PartResponse
from almacen.core.entities import Part, StockMovement
from almacen.core.exceptions import PartNotFoundError, ValidationError
from almacen.core.interfaces import IPartStore


class GetPartUseCase:
    """Load a part with its full movement history."""

    def __init__(self, part_store: IPartStore | None = None):
        self._part_store = part_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from almacen.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def execute(self, part_id: int) -> Part:
        store = await self._get_part_store()
        part = await store.get_part(part_id)
        if part is None:
            raise PartNotFoundError(part_id)
        return part

    def to_response(self, part: Part) -> PartResponse:
        return part_to_response(part, include_movements=True)


class ListPartMovementsUseCase:
    """Movements of one part, newest first."""

    def __init__(self, part_store: IPartStore | None = None):
        self._part_store = part_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from almacen.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def execute(
        self, part_id: int, limit: int = 100, offset: int = 0
    ) -> list[StockMovement]:
        if limit <= 0:
            raise ValidationError("limit", "Limit must be greater than zero", limit)
        if offset < 0:
            raise ValidationError("offset", "Offset cannot be negative", offset)

        store = await self._get_part_store()
        if await store.get_part(part_id, with_movements=False) is None:
            raise PartNotFoundError(part_id)
        return await store.get_movements(part_id, limit=limit, offset=offset)

    def to_response(self, part_id: int, movements: list[StockMovement]) -> MovementListResponse:
        return MovementListResponse(
            part_id=part_id, items=[movement_to_response(m) for m in movements]
        )
