"""Warehouse use cases: create, get, list, delete."""

from almacen.application.dto.converters import warehouse_to_response
from almacen.application.dto.requests import CreateWarehouseRequest
from almacen.application.dto.responses import WarehouseListResponse, WarehouseResponse
from almacen.config import get_logger
from almacen.core.entities import Warehouse
from almacen.core.exceptions import ValidationError, WarehouseNotFoundError
from almacen.core.interfaces import IClock, IWarehouseStore

logger = get_logger(__name__)


class _WarehouseUseCase:
    def __init__(self, warehouse_store: IWarehouseStore | None = None):
        self._warehouse_store = warehouse_store

    async def _get_warehouse_store(self) -> IWarehouseStore:
        if self._warehouse_store is None:
            from almacen.infrastructure.storage.sqlite import get_warehouse_store

            self._warehouse_store = await get_warehouse_store()
        return self._warehouse_store

    def to_response(self, warehouse: Warehouse) -> WarehouseResponse:
        return warehouse_to_response(warehouse)


class CreateWarehouseUseCase(_WarehouseUseCase):
    def __init__(
        self,
        warehouse_store: IWarehouseStore | None = None,
        clock: IClock | None = None,
    ):
        super().__init__(warehouse_store)
        self._clock = clock

    def _get_clock(self) -> IClock:
        if self._clock is None:
            from almacen.application.services import get_clock

            self._clock = get_clock()
        return self._clock

    async def execute(self, request: CreateWarehouseRequest) -> Warehouse:
        now = self._get_clock().now()
        warehouse = Warehouse(
            name=request.name.strip(),
            address=request.address.strip(),
            department=request.department.strip(),
            created_at=now,
            updated_at=now,
        )
        for field in ("name", "address", "department"):
            if not getattr(warehouse, field):
                raise ValidationError(field, "Field is required")

        store = await self._get_warehouse_store()
        return await store.create(warehouse)


class GetWarehouseUseCase(_WarehouseUseCase):
    async def execute(self, warehouse_id: int) -> Warehouse:
        store = await self._get_warehouse_store()
        warehouse = await store.get(warehouse_id)
        if warehouse is None:
            raise WarehouseNotFoundError(warehouse_id)
        return warehouse


class ListWarehousesUseCase(_WarehouseUseCase):
    async def execute(
        self,
        department: str | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Warehouse]:
        store = await self._get_warehouse_store()
        return await store.list_warehouses(
            department=department, search=search, limit=limit, offset=offset
        )

    def to_list_response(self, warehouses: list[Warehouse]) -> WarehouseListResponse:
        return WarehouseListResponse(
            items=[warehouse_to_response(w) for w in warehouses],
            total=len(warehouses),
        )


class DeleteWarehouseUseCase(_WarehouseUseCase):
    """Delete an empty warehouse; one that still holds parts is refused."""

    async def execute(self, warehouse_id: int) -> None:
        store = await self._get_warehouse_store()
        if await store.get(warehouse_id) is None:
            raise WarehouseNotFoundError(warehouse_id)

        held = await store.count_parts(warehouse_id)
        if held:
            raise ValidationError(
                "warehouse_id", f"Warehouse still holds {held} part(s)", warehouse_id
            )

        await store.delete(warehouse_id)
        logger.info("delete_warehouse_complete", warehouse_id=warehouse_id)
