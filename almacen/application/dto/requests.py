"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation. Length limits and the
refusal of NaN or infinite numbers live here; ledger and finance rules
(non-negative thresholds, positive amounts and so on) are checked by the
core so they surface as validation errors.
"""

from datetime import date
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat

from almacen.core.entities.finance import (
    FinanceType,
    PaymentMethod,
    RecurrenceFrequency,
    SourceType,
)
from almacen.core.entities.part import MovementType, PartCategory, Unit

Tag = Annotated[str, Field(max_length=50)]


# --- Warehouses ---


class CreateWarehouseRequest(BaseModel):
    """Request to register a warehouse."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Almacén Central"])
    address: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1, max_length=100, examples=["Lima"])


# --- Parts ---


class SupplierRequest(BaseModel):
    """Supplier contact, every field optional."""

    name: str | None = Field(default=None, max_length=100)
    contact: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    email: str | None = Field(default=None, max_length=100)


class CreatePartRequest(BaseModel):
    """Request to create a part with its opening stock."""

    name: str = Field(..., max_length=100, description="Part name")
    part_number: str = Field(
        ...,
        max_length=50,
        description="Catalog number, stored upper-cased",
        examples=["FLT-0042"],
    )
    category: PartCategory = Field(default=PartCategory.OTHER)
    warehouse_id: int = Field(..., description="Warehouse holding the part")
    initial_stock: FiniteFloat = Field(default=0.0, description="Opening stock level")
    minimum_stock: FiniteFloat = Field(default=1.0, description="Low-stock threshold")
    maximum_stock: FiniteFloat | None = Field(default=None)
    unit: Unit = Field(default=Unit.PIECE)
    unit_price: FiniteFloat | None = Field(default=None, description="Price per unit")
    supplier: SupplierRequest | None = None
    location: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=500)
    payment_method: PaymentMethod | None = Field(
        default=None,
        description="Payment method of the purchase expense for priced opening stock",
    )


class UpdatePartRequest(BaseModel):
    """Partial update of non-stock part fields.

    Only fields present in the request body are applied. Stock cannot be
    set here; use a stock movement instead.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    part_number: str | None = Field(default=None, max_length=50)
    category: PartCategory | None = None
    warehouse_id: int | None = None
    minimum_stock: FiniteFloat | None = None
    maximum_stock: FiniteFloat | None = None
    unit: Unit | None = None
    unit_price: FiniteFloat | None = None
    supplier: SupplierRequest | None = None
    location: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=500)


class StockMovementRequest(BaseModel):
    """Request to apply a stock movement.

    For Ajuste the quantity is the target stock level, not a delta.
    """

    type: MovementType = Field(..., examples=["Entrada", "Salida", "Ajuste"])
    quantity: FiniteFloat = Field(..., description="Magnitude, or target level for Ajuste")
    reason: str = Field(..., max_length=200, description="Why the stock changed")
    reference: str | None = Field(default=None, max_length=50, description="PO, invoice...")
    payment_method: PaymentMethod | None = Field(
        default=None,
        description="Payment method of the purchase expense for a priced Entrada",
    )


# --- Finance ---


class RecurringConfigRequest(BaseModel):
    """Recurring schedule; next_date is derived from the record date if omitted."""

    frequency: RecurrenceFrequency | None = None
    next_date: date | None = None
    end_date: date | None = None
    is_active: bool = True


class CreateFinanceRecordRequest(BaseModel):
    """Request to record income or an expense."""

    type: FinanceType
    category: str = Field(..., max_length=100, examples=["Combustible"])
    subcategory: str | None = Field(default=None, max_length=100)
    description: str = Field(..., max_length=200)
    amount: FiniteFloat = Field(..., description="Positive amount")
    record_date: date = Field(..., description="Business date of the record")
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=500)
    tags: list[Tag] = Field(default_factory=list)
    source_type: SourceType = SourceType.MANUAL
    source_id: str | None = None
    is_recurring: bool = False
    recurring_config: RecurringConfigRequest | None = None


class UpdateFinanceRecordRequest(BaseModel):
    """Partial update of a finance record; only sent fields are applied."""

    model_config = ConfigDict(extra="forbid")

    type: FinanceType | None = None
    category: str | None = Field(default=None, max_length=100)
    subcategory: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=200)
    amount: FiniteFloat | None = None
    record_date: date | None = None
    payment_method: PaymentMethod | None = None
    reference: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=500)
    tags: list[Tag] | None = None
    source_type: SourceType | None = None
    source_id: str | None = None
    is_recurring: bool | None = None
    recurring_config: RecurringConfigRequest | None = None


class FinanceStatsRequest(BaseModel):
    """Stats window: a period token, or an inclusive date range that overrides it."""

    period: str | None = Field(default=None, examples=["day", "week", "month", "year"])
    start_date: date | None = None
    end_date: date | None = None
