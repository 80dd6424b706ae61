"""Expense records written for priced stock entries."""

from almacen.config import get_logger
from almacen.config.settings import LedgerSettings
from almacen.core.entities import (
    FinanceRecord,
    FinanceType,
    MovementType,
    Part,
    PaymentMethod,
    SourceType,
    StockMovement,
)
from almacen.core.interfaces import IFinanceStore
from almacen.core.services import finance_rules

logger = get_logger(__name__)


def build_purchase_expense(
    part: Part,
    movement: StockMovement,
    settings: LedgerSettings,
    payment_method: PaymentMethod | None = None,
    opening: bool = False,
) -> FinanceRecord | None:
    """
    Egreso for an Entrada of a priced part, or None when none is due.

    amount = quantity * unit_price; the record links back to the part
    through source_type/source_id.
    """
    if not settings.record_purchase_expenses:
        return None
    if movement.movement_type != MovementType.IN or movement.quantity <= 0:
        return None
    if not part.unit_price or part.unit_price <= 0:
        return None

    qty = movement.quantity
    verb = "Compra inicial de" if opening else "Compra de"
    description = f"{verb} {qty:g} x {part.name} ({part.part_number})"
    notes = (
        f"{movement.reason}. Cantidad: {qty:g}, Precio unitario: {part.unit_price:g}"
    )

    return FinanceRecord(
        type=FinanceType.EXPENSE,
        category=settings.purchase_expense_category,
        description=description[:200],
        amount=qty * part.unit_price,
        record_date=movement.moved_at.date(),
        payment_method=payment_method or PaymentMethod(settings.default_payment_method),
        reference=movement.reference,
        notes=notes[:500],
        source_type=SourceType.PART,
        source_id=str(part.id),
    )


async def record_purchase_expense(
    finance_store: IFinanceStore,
    part: Part,
    movement: StockMovement,
    settings: LedgerSettings,
    payment_method: PaymentMethod | None = None,
    opening: bool = False,
) -> FinanceRecord | None:
    """
    Store the purchase expense for a stock entry.

    The stock change has already been committed; a failure here is logged
    and reported as None rather than raised.
    """
    try:
        record = build_purchase_expense(part, movement, settings, payment_method, opening)
        if record is None:
            return None
        record = await finance_store.create_record(finance_rules.prepare_record(record))
    except Exception as e:
        logger.error(
            "purchase_expense_failed",
            part_id=part.id,
            movement_id=movement.id,
            error=str(e),
        )
        return None

    logger.info(
        "purchase_expense_recorded",
        part_id=part.id,
        record_id=record.id,
        amount=record.amount,
    )
    return record
