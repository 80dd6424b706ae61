"""Income/expense entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class FinanceType(str, Enum):
    """Direction of a finance record."""

    INCOME = "Ingreso"
    EXPENSE = "Egreso"


class PaymentMethod(str, Enum):
    """How the money moved."""

    CASH = "Efectivo"
    TRANSFER = "Transferencia"
    CHECK = "Cheque"
    CREDIT_CARD = "Tarjeta de Crédito"
    DEBIT_CARD = "Tarjeta de Débito"
    YAPE = "Yape"
    PLIN = "Plin"
    OTHER = "Otro"


class SourceType(str, Enum):
    """Kind of business object a record originated from."""

    RENTAL = "Rental"
    MANUAL = "Manual"
    FUEL = "Fuel"
    PART = "Part"
    TOOL = "Tool"
    MAINTENANCE = "Maintenance"
    PURCHASE = "Purchase"
    SALE = "Sale"


class RecurrenceFrequency(str, Enum):
    """Schedule frequency for recurring records."""

    DAILY = "Diario"
    WEEKLY = "Semanal"
    BIWEEKLY = "Quincenal"
    MONTHLY = "Mensual"
    QUARTERLY = "Trimestral"
    SEMIANNUAL = "Semestral"
    ANNUAL = "Anual"


# Suggested categories per type; category stays free text.
RECOMMENDED_CATEGORIES: dict[FinanceType, list[str]] = {
    FinanceType.INCOME: [
        "Alquileres",
        "Servicios",
        "Ventas",
        "Intereses",
        "Otros Ingresos",
    ],
    FinanceType.EXPENSE: [
        "Combustible",
        "Mantenimiento",
        "Seguros",
        "Servicios Públicos",
        "Salarios",
        "Alquiler",
        "Suministros",
        "Marketing",
        "Otros Gastos",
        "Compra de Repuestos",
    ],
}


class RecurringConfig(BaseModel):
    """
    Stored schedule for a recurring record.

    Nothing in this service materializes future occurrences; external
    schedulers read next_date and is_active.
    """

    frequency: RecurrenceFrequency | None = None
    next_date: date | None = None
    end_date: date | None = None
    is_active: bool = True


class FinanceRecord(BaseModel):
    """An income or expense fact."""

    id: int | None = None
    type: FinanceType
    category: str
    subcategory: str | None = None
    description: str
    amount: float
    record_date: date
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference: str | None = None
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)
    source_type: SourceType = SourceType.MANUAL
    source_id: str | None = None
    is_recurring: bool = False
    recurring_config: RecurringConfig | None = None
    version: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def signed_amount(self) -> float:
        """Amount with expenses negative."""
        return self.amount if self.type == FinanceType.INCOME else -self.amount


class CategoryUsage(BaseModel):
    """A category in use together with the subcategories seen under it."""

    category: str
    subcategories: list[str] = Field(default_factory=list)
