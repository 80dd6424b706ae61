"""Application use cases."""

from almacen.application.use_cases.apply_stock_movement import (
    ApplyStockMovementUseCase,
    StockMovementResult,
)
from almacen.application.use_cases.create_finance_record import CreateFinanceRecordUseCase
from almacen.application.use_cases.create_part import CreatePartResult, CreatePartUseCase
from almacen.application.use_cases.delete_finance_record import DeleteFinanceRecordUseCase
from almacen.application.use_cases.delete_part import DeletePartUseCase
from almacen.application.use_cases.get_finance_stats import GetFinanceStatsUseCase
from almacen.application.use_cases.get_part import GetPartUseCase, ListPartMovementsUseCase
from almacen.application.use_cases.get_part_stats import GetPartStatsUseCase
from almacen.application.use_cases.list_finance_records import (
    FinanceCategoriesResult,
    GetFinanceRecordUseCase,
    ListFinanceCategoriesUseCase,
    ListFinanceRecordsUseCase,
)
from almacen.application.use_cases.list_parts import ListPartsUseCase
from almacen.application.use_cases.manage_warehouses import (
    CreateWarehouseUseCase,
    DeleteWarehouseUseCase,
    GetWarehouseUseCase,
    ListWarehousesUseCase,
)
from almacen.application.use_cases.update_finance_record import UpdateFinanceRecordUseCase
from almacen.application.use_cases.update_part import UpdatePartUseCase

__all__ = [
    # Warehouses
    "CreateWarehouseUseCase",
    "GetWarehouseUseCase",
    "ListWarehousesUseCase",
    "DeleteWarehouseUseCase",
    # Parts
    "CreatePartUseCase",
    "CreatePartResult",
    "UpdatePartUseCase",
    "DeletePartUseCase",
    "ApplyStockMovementUseCase",
    "StockMovementResult",
    "GetPartUseCase",
    "ListPartMovementsUseCase",
    "ListPartsUseCase",
    "GetPartStatsUseCase",
    # Finance
    "CreateFinanceRecordUseCase",
    "UpdateFinanceRecordUseCase",
    "DeleteFinanceRecordUseCase",
    "GetFinanceRecordUseCase",
    "ListFinanceRecordsUseCase",
    "ListFinanceCategoriesUseCase",
    "FinanceCategoriesResult",
    "GetFinanceStatsUseCase",
]
