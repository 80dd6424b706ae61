"""Apply Stock Movement Use Case: Entrada / Salida / Ajuste / Transferencia."""

from dataclasses import dataclass

from almacen.application.dto.converters import movement_to_response, part_to_response
from almacen.application.dto.requests import StockMovementRequest
from almacen.application.dto.responses import StockMovementResultResponse
from almacen.application.use_cases.purchase_expense import record_purchase_expense
from almacen.config import get_logger
from almacen.config.settings import LedgerSettings
from almacen.core.entities import FinanceRecord, MovementType, Part, StockMovement
from almacen.core.exceptions import PartNotFoundError
from almacen.core.interfaces import IClock, IFinanceStore, IPartStore
from almacen.core.services import stock_ledger

logger = get_logger(__name__)


@dataclass
class StockMovementResult:
    """Result of applying a movement."""

    part: Part
    movement: StockMovement
    expense_record: FinanceRecord | None = None


class ApplyStockMovementUseCase:
    """
    Apply one movement to a part's ledger.

    The new stock level and the movement row are written together; a
    rejected movement leaves stock and history untouched. A concurrent
    writer that got in first makes this call fail with ConflictError.
    """

    def __init__(
        self,
        part_store: IPartStore | None = None,
        finance_store: IFinanceStore | None = None,
        settings: LedgerSettings | None = None,
        clock: IClock | None = None,
    ):
        self._part_store = part_store
        self._finance_store = finance_store
        self._settings = settings
        self._clock = clock

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from almacen.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

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

    async def execute(self, part_id: int, request: StockMovementRequest) -> StockMovementResult:
        """Execute apply stock movement use case."""
        logger.info(
            "stock_movement_started",
            part_id=part_id,
            type=request.type.value,
            qty=request.quantity,
        )

        store = await self._get_part_store()
        part = await store.get_part(part_id, with_movements=False)
        if part is None:
            raise PartNotFoundError(part_id)

        updated, movement = stock_ledger.apply_movement(
            part,
            request.type,
            request.quantity,
            request.reason,
            reference=request.reference,
            moved_at=self._get_clock().now(),
        )
        updated, movement = await store.append_movement(
            updated, movement, expected_version=part.version
        )

        expense = None
        if movement.movement_type == MovementType.IN:
            expense = await record_purchase_expense(
                await self._get_finance_store(),
                updated,
                movement,
                self._get_settings(),
                payment_method=request.payment_method,
            )

        logger.info(
            "stock_movement_complete",
            part_id=part_id,
            previous_stock=movement.previous_stock,
            new_stock=movement.new_stock,
            status=updated.status.value,
        )
        return StockMovementResult(part=updated, movement=movement, expense_record=expense)

    def to_response(self, result: StockMovementResult) -> StockMovementResultResponse:
        """Convert result to API response."""
        return StockMovementResultResponse(
            part=part_to_response(result.part),
            movement=movement_to_response(result.movement),
            expense_record_id=result.expense_record.id if result.expense_record else None,
        )
