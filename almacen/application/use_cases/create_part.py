"""Create Part Use Case: new part with an opening stock movement."""

from dataclasses import dataclass

from almacen.application.dto.converters import part_to_response
from almacen.application.dto.requests import CreatePartRequest
from almacen.application.dto.responses import PartResponse
from almacen.application.use_cases.purchase_expense import record_purchase_expense
from almacen.config import get_logger
from almacen.config.settings import LedgerSettings
from almacen.core.entities import FinanceRecord, Part, Supplier
from almacen.core.exceptions import ValidationError
from almacen.core.interfaces import IClock, IFinanceStore, IPartStore, IWarehouseStore
from almacen.core.services import stock_ledger

logger = get_logger(__name__)


@dataclass
class CreatePartResult:
    """Result of creating a part."""

    part: Part
    expense_record: FinanceRecord | None = None


class CreatePartUseCase:
    """Validate, open the ledger and store a new part."""

    def __init__(
        self,
        part_store: IPartStore | None = None,
        warehouse_store: IWarehouseStore | None = None,
        finance_store: IFinanceStore | None = None,
        settings: LedgerSettings | None = None,
        clock: IClock | None = None,
    ):
        self._part_store = part_store
        self._warehouse_store = warehouse_store
        self._finance_store = finance_store
        self._settings = settings
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

    async def _get_finance_store(self) -> IFinanceStore:
        if self._finance_store is None:
            from almacen.infrastructure.storage.sqlite import get_finance_store

            self._finance_store = await get_finance_store()
        return self._finance_store

    def _get_settings(self) -> LedgerSettings:
        if self._settings is None:
            from almacen.config import get_settings

            self._settings = get_settings().ledger
        return self._settings

    def _get_clock(self) -> IClock:
        if self._clock is None:
            from almacen.application.services import get_clock

            self._clock = get_clock()
        return self._clock

    async def execute(self, request: CreatePartRequest) -> CreatePartResult:
        """Execute create part use case."""
        logger.info(
            "create_part_started",
            part_number=request.part_number,
            warehouse_id=request.warehouse_id,
            initial_stock=request.initial_stock,
        )
        settings = self._get_settings()

        wh_store = await self._get_warehouse_store()
        if await wh_store.get(request.warehouse_id) is None:
            raise ValidationError(
                "warehouse_id", "Warehouse does not exist", request.warehouse_id
            )

        now = self._get_clock().now()
        part = Part(
            name=request.name.strip(),
            part_number=request.part_number,
            category=request.category,
            warehouse_id=request.warehouse_id,
            minimum_stock=request.minimum_stock,
            maximum_stock=request.maximum_stock,
            unit=request.unit,
            unit_price=request.unit_price,
            supplier=Supplier(**request.supplier.model_dump()) if request.supplier else None,
            location=request.location,
            description=request.description,
            notes=request.notes,
            created_at=now,
            updated_at=now,
        )
        part = stock_ledger.open_ledger(
            part, request.initial_stock, reason=settings.opening_reason, opened_at=now
        )

        store = await self._get_part_store()
        part = await store.create_part(part)

        expense = None
        if part.movements:
            expense = await record_purchase_expense(
                await self._get_finance_store(),
                part,
                part.movements[0],
                settings,
                payment_method=request.payment_method,
                opening=True,
            )

        logger.info(
            "create_part_complete",
            part_id=part.id,
            status=part.status.value,
            expense_record_id=expense.id if expense else None,
        )
        return CreatePartResult(part=part, expense_record=expense)

    def to_response(self, result: CreatePartResult) -> PartResponse:
        """Convert result to API response."""
        return part_to_response(result.part, include_movements=True)
