"""Part and stock movement entities."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class PartCategory(str, Enum):
    """Fixed part classification."""

    ENGINE = "Motor"
    TRANSMISSION = "Transmisión"
    HYDRAULIC = "Hidráulico"
    ELECTRICAL = "Eléctrico"
    PNEUMATIC = "Neumático"
    FILTERS = "Filtros"
    OILS = "Aceites y Lubricantes"
    BRAKES = "Frenos"
    SUSPENSION = "Suspensión"
    BODYWORK = "Carrocería"
    TOOLS = "Herramientas"
    OTHER = "Otros"


class Unit(str, Enum):
    """Unit of measure for stock quantities."""

    PIECE = "Unidad"
    LITER = "Litro"
    GALLON = "Galón"
    KILOGRAM = "Kilogramo"
    METER = "Metro"
    BOX = "Caja"
    PACKAGE = "Paquete"
    ROLL = "Rollo"


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "Entrada"
    OUT = "Salida"
    ADJUST = "Ajuste"  # quantity is the target stock level, not a delta
    TRANSFER = "Transferencia"


class StockStatus(str, Enum):
    """Derived stock health."""

    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    NORMAL = "normal"


def stock_status(current_stock: float, minimum_stock: float) -> StockStatus:
    """
    Classify stock health from (current, minimum) alone.

    Zero stock always wins over the minimum threshold, so a part with
    minimum 0 and stock 0 is out of stock rather than low.
    """
    if current_stock == 0:
        return StockStatus.OUT_OF_STOCK
    if current_stock <= minimum_stock:
        return StockStatus.LOW_STOCK
    return StockStatus.NORMAL


class Supplier(BaseModel):
    """Optional supplier contact attached to a part."""

    name: str | None = None
    contact: str | None = None
    phone: str | None = None
    email: str | None = None


class StockMovement(BaseModel):
    """
    Immutable record of one stock change.

    previous_stock/new_stock are captured when the movement is applied;
    new_stock - previous_stock is always the signed effect of the movement.
    """

    id: int | None = None
    part_id: int | None = None
    movement_type: MovementType
    quantity: float
    reason: str
    reference: str | None = None
    previous_stock: float
    new_stock: float
    moved_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}

    @property
    def delta(self) -> float:
        """Signed change this movement made to stock."""
        return float(Decimal(repr(self.new_stock)) - Decimal(repr(self.previous_stock)))


class Part(BaseModel):
    """
    A stock-keeping unit held in one warehouse.

    current_stock is a projection of the movement log: it always equals
    the new_stock of the last appended movement.
    """

    id: int | None = None
    name: str
    part_number: str
    category: PartCategory = PartCategory.OTHER
    warehouse_id: int
    current_stock: float = 0.0
    minimum_stock: float = 1.0
    maximum_stock: float | None = None
    unit: Unit = Unit.PIECE
    unit_price: float | None = None
    supplier: Supplier | None = None
    location: str | None = None
    description: str | None = None
    notes: str | None = None
    movements: list[StockMovement] = Field(default_factory=list)
    version: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def status(self) -> StockStatus:
        return stock_status(self.current_stock, self.minimum_stock)

    @property
    def stock_value(self) -> float:
        """current_stock * unit_price, missing price counts as zero."""
        return self.current_stock * (self.unit_price or 0.0)
