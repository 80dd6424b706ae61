"""Core domain entities."""

from almacen.core.entities.finance import (
    RECOMMENDED_CATEGORIES,
    CategoryUsage,
    FinanceRecord,
    FinanceType,
    PaymentMethod,
    RecurrenceFrequency,
    RecurringConfig,
    SourceType,
)
from almacen.core.entities.part import (
    MovementType,
    Part,
    PartCategory,
    StockMovement,
    StockStatus,
    Supplier,
    Unit,
    stock_status,
)
from almacen.core.entities.query import ALL, FinanceFilter, Page, PartFilter
from almacen.core.entities.stats import (
    CategoryAmount,
    CategoryStockSummary,
    FinanceStats,
    FinanceSummary,
    MonthlyTrendPoint,
    PartStats,
)
from almacen.core.entities.warehouse import Warehouse

__all__ = [
    # Part entities
    "Part",
    "PartCategory",
    "Unit",
    "Supplier",
    "StockMovement",
    "MovementType",
    "StockStatus",
    "stock_status",
    # Finance entities
    "FinanceRecord",
    "FinanceType",
    "PaymentMethod",
    "SourceType",
    "RecurrenceFrequency",
    "RecurringConfig",
    "CategoryUsage",
    "RECOMMENDED_CATEGORIES",
    # Warehouse entities
    "Warehouse",
    # Query entities
    "ALL",
    "PartFilter",
    "FinanceFilter",
    "Page",
    # Stats entities
    "PartStats",
    "CategoryStockSummary",
    "FinanceStats",
    "FinanceSummary",
    "CategoryAmount",
    "MonthlyTrendPoint",
]
