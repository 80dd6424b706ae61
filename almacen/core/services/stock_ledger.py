"""
Stock ledger rules.

Pure functions over Part entities: no storage and no clock. Use cases
load a snapshot, call into this module and persist what comes back.
Every function either returns a new Part/StockMovement or raises
ValidationError; the input Part is never mutated.

Quantities carry at most three decimal places (litres, kilograms) and
stock arithmetic is done in Decimal, so draining 0.1 + 0.2 with 0.3
lands on exactly zero.
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Any

from almacen.core.entities.part import MovementType, Part, StockMovement
from almacen.core.exceptions import InsufficientStockError, ValidationError

QUANTITY_PLACES = Decimal("0.001")
MAX_QUANTITY = 1_000_000_000

# Fields an update may touch. Stock only changes through movements.
PATCHABLE_FIELDS = frozenset(
    {
        "name",
        "part_number",
        "category",
        "warehouse_id",
        "minimum_stock",
        "maximum_stock",
        "unit",
        "unit_price",
        "supplier",
        "location",
        "description",
        "notes",
    }
)

# Patchable fields that cannot be cleared
REQUIRED_FIELDS = frozenset(
    {"name", "part_number", "category", "warehouse_id", "minimum_stock", "unit"}
)

OUTGOING_TYPES = frozenset({MovementType.OUT, MovementType.TRANSFER})


def normalize_part_number(part_number: str) -> str:
    return part_number.strip().upper()


def check_finite(field: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValidationError(field, "Must be a finite number", str(value))


def check_quantity(field: str, value: float) -> None:
    """Reject NaN, infinities, absurd magnitudes and sub-milli precision."""
    check_finite(field, value)
    if abs(value) > MAX_QUANTITY:
        raise ValidationError(field, f"Must not exceed {MAX_QUANTITY}", value)
    exact = Decimal(repr(float(value)))
    if exact != exact.quantize(QUANTITY_PLACES):
        raise ValidationError(field, "At most 3 decimal places are allowed", value)


def validate_part(part: Part) -> None:
    """Check identity fields and threshold invariants."""
    if not part.name or not part.name.strip():
        raise ValidationError("name", "Part name is required")
    if not part.part_number or not part.part_number.strip():
        raise ValidationError("part_number", "Part number is required")
    check_quantity("minimum_stock", part.minimum_stock)
    if part.minimum_stock < 0:
        raise ValidationError(
            "minimum_stock", "Minimum stock cannot be negative", part.minimum_stock
        )
    if part.maximum_stock is not None:
        check_quantity("maximum_stock", part.maximum_stock)
        if part.maximum_stock < part.minimum_stock:
            raise ValidationError(
                "maximum_stock",
                f"Maximum stock must be >= minimum stock ({part.minimum_stock})",
                part.maximum_stock,
            )
    if part.unit_price is not None:
        check_finite("unit_price", part.unit_price)
        if part.unit_price < 0:
            raise ValidationError("unit_price", "Unit price cannot be negative", part.unit_price)


def next_stock(movement_type: MovementType, quantity: float, previous_stock: float) -> float:
    """Stock level after a movement applied on previous_stock."""
    previous = Decimal(repr(float(previous_stock)))
    qty = Decimal(repr(float(quantity)))
    if movement_type == MovementType.IN:
        result = previous + qty
    elif movement_type in OUTGOING_TYPES:
        result = previous - qty
    else:
        # Ajuste: quantity is the absolute target level
        result = qty
    return float(result)


def build_movement(
    part: Part,
    movement_type: MovementType,
    quantity: float,
    reason: str,
    reference: str | None = None,
    moved_at: datetime | None = None,
) -> StockMovement:
    """
    Validate a requested movement against the part's current stock.

    Raises:
        ValidationError: bad quantity or empty reason
        InsufficientStockError: outgoing quantity exceeds current stock
    """
    if not reason or not reason.strip():
        raise ValidationError("reason", "Reason is required")

    check_quantity("quantity", quantity)
    if movement_type == MovementType.ADJUST:
        if quantity < 0:
            raise ValidationError(
                "quantity", "Adjustment target stock cannot be negative", quantity
            )
    elif quantity <= 0:
        raise ValidationError("quantity", "Quantity must be greater than zero", quantity)

    previous_stock = part.current_stock
    if movement_type in OUTGOING_TYPES and quantity > previous_stock:
        raise InsufficientStockError(
            part_id=part.id, requested=quantity, available=previous_stock
        )

    return StockMovement(
        part_id=part.id,
        movement_type=movement_type,
        quantity=quantity,
        reason=reason.strip(),
        reference=reference.strip() if reference else None,
        previous_stock=previous_stock,
        new_stock=next_stock(movement_type, quantity, previous_stock),
        moved_at=moved_at or datetime.now(),
    )


def apply_movement(
    part: Part,
    movement_type: MovementType,
    quantity: float,
    reason: str,
    reference: str | None = None,
    moved_at: datetime | None = None,
) -> tuple[Part, StockMovement]:
    """Return the part with the movement appended and stock projected."""
    movement = build_movement(part, movement_type, quantity, reason, reference, moved_at)
    updated = part.model_copy(
        update={
            "current_stock": movement.new_stock,
            "movements": [*part.movements, movement],
            "updated_at": movement.moved_at,
        }
    )
    return updated, movement


def open_ledger(
    part: Part,
    initial_stock: float,
    reason: str = "Stock inicial",
    opened_at: datetime | None = None,
) -> Part:
    """
    Start a new part's history with an opening Entrada.

    The opening movement is recorded even for an initial stock of zero so
    that every ledger has exactly one opening entry.
    """
    check_quantity("initial_stock", initial_stock)
    if initial_stock < 0:
        raise ValidationError("initial_stock", "Initial stock cannot be negative", initial_stock)

    part = part.model_copy(update={"part_number": normalize_part_number(part.part_number)})
    validate_part(part)

    opened_at = opened_at or part.created_at
    opening = StockMovement(
        part_id=part.id,
        movement_type=MovementType.IN,
        quantity=initial_stock,
        reason=reason,
        previous_stock=0.0,
        new_stock=initial_stock,
        moved_at=opened_at,
    )
    return part.model_copy(
        update={"current_stock": initial_stock, "movements": [opening]}
    )


def apply_patch(part: Part, patch: dict[str, Any], now: datetime | None = None) -> Part:
    """
    Apply non-stock field edits.

    A new minimum above current stock is accepted; it only changes the
    derived status.
    """
    if "current_stock" in patch:
        raise ValidationError(
            "current_stock", "Stock can only change through a stock movement"
        )
    unknown = sorted(set(patch) - PATCHABLE_FIELDS)
    if unknown:
        raise ValidationError(unknown[0], "Field cannot be updated")
    for field in sorted(REQUIRED_FIELDS & set(patch)):
        if patch[field] is None:
            raise ValidationError(field, "Field cannot be cleared")

    changes = dict(patch)
    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
    if changes.get("part_number") is not None:
        changes["part_number"] = normalize_part_number(changes["part_number"])
    changes["updated_at"] = now or datetime.now()

    updated = part.model_copy(update=changes)
    validate_part(updated)
    return updated


def replay(movements: list[StockMovement], opening_stock: float = 0.0) -> float:
    """Fold movements in order into a stock level."""
    stock = opening_stock
    for movement in movements:
        stock = next_stock(movement.movement_type, movement.quantity, stock)
    return stock


def verify_history(part: Part) -> bool:
    """Check that the movement chain is contiguous and ends at current_stock."""
    running = 0.0
    for movement in part.movements:
        if movement.previous_stock != running:
            return False
        if movement.new_stock != next_stock(movement.movement_type, movement.quantity, running):
            return False
        running = movement.new_stock
    return running == part.current_stock
