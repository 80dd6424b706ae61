"""Update Part Use Case: non-stock field edits."""

from almacen.application.dto.converters import part_to_response
from almacen.application.dto.requests import UpdatePartRequest
from almacen.application.dto.responses import PartResponse
from almacen.config import get_logger
from almacen.core.entities import Part, Supplier
from almacen.core.exceptions import PartNotFoundError, ValidationError
from almacen.core.interfaces import IClock, IPartStore, IWarehouseStore
from almacen.core.services import stock_ledger

logger = get_logger(__name__)


class UpdatePartUseCase:
    """
    Apply a partial update to a part.

    Lowering or raising thresholds never fails on the current stock; the
    change shows up in the derived status instead.
    """

    def __init__(
        self,
        part_store: IPartStore | None = None,
        warehouse_store: IWarehouseStore | None = None,
        clock: IClock | None = None,
    ):
        self._part_store = part_store
        self._warehouse_store = warehouse_store
        self._clock = clock

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from almacen.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def _get_warehouse_store(self) -> IWarehouseStore:
        if self._warehouse_store is None:
            from almacen.infrastructure.storage.sqlite import get_warehouse_store

            self._warehouse_store = await get_warehouse_store()
        return self._warehouse_store

    def _get_clock(self) -> IClock:
        if self._clock is None:
            from almacen.application.services import get_clock

            self._clock = get_clock()
        return self._clock

    async def execute(self, part_id: int, request: UpdatePartRequest) -> Part:
        patch = request.model_dump(exclude_unset=True)
        if patch.get("supplier") is not None:
            patch["supplier"] = Supplier(**patch["supplier"])

        store = await self._get_part_store()
        part = await store.get_part(part_id, with_movements=False)
        if part is None:
            raise PartNotFoundError(part_id)

        warehouse_id = patch.get("warehouse_id")
        if warehouse_id is not None and warehouse_id != part.warehouse_id:
            wh_store = await self._get_warehouse_store()
            if await wh_store.get(warehouse_id) is None:
                raise ValidationError("warehouse_id", "Warehouse does not exist", warehouse_id)

        updated = stock_ledger.apply_patch(part, patch, now=self._get_clock().now())
        updated = await store.update_part(updated, expected_version=part.version)

        logger.info(
            "part_update_complete",
            part_id=part_id,
            fields=sorted(patch),
            status=updated.status.value,
        )
        return updated

    def to_response(self, part: Part) -> PartResponse:
        return part_to_response(part)
