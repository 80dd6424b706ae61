"""
Dependency injection container for FastAPI.

Provides use case instances and parsed filter criteria to route
handlers. Tests swap any of these through app.dependency_overrides.
"""

from datetime import date
from enum import Enum
from functools import lru_cache
from typing import TypeVar

from fastapi import Query

from almacen.application.use_cases import (
    ApplyStockMovementUseCase,
    CreateFinanceRecordUseCase,
    CreatePartUseCase,
    CreateWarehouseUseCase,
    DeleteFinanceRecordUseCase,
    DeletePartUseCase,
    DeleteWarehouseUseCase,
    GetFinanceRecordUseCase,
    GetFinanceStatsUseCase,
    GetPartStatsUseCase,
    GetPartUseCase,
    GetWarehouseUseCase,
    ListFinanceCategoriesUseCase,
    ListFinanceRecordsUseCase,
    ListPartMovementsUseCase,
    ListPartsUseCase,
    ListWarehousesUseCase,
    UpdateFinanceRecordUseCase,
    UpdatePartUseCase,
)
from almacen.config import Settings, get_settings
from almacen.core.entities import (
    ALL,
    FinanceFilter,
    FinanceType,
    PartCategory,
    PartFilter,
    PaymentMethod,
    StockStatus,
)
from almacen.core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Filter parsing


def _unset(value: str | None) -> bool:
    return value is None or value.strip() == "" or value == ALL


def parse_enum(field: str, value: str | None, enum_type: type[E]) -> E | None:
    """Turn a query value into an enum member; absent or "all" is None."""
    if _unset(value):
        return None
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_type)
        raise ValidationError(field, f"Expected one of: {allowed}", value) from None


def parse_warehouse(value: str | None) -> int | None:
    if _unset(value):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except ValueError:
        raise ValidationError("warehouse_id", "Warehouse id must be an integer", value) from None


def get_part_filter(
    category: str | None = Query(default=None, description='Part category or "all"'),
    warehouse_id: str | None = Query(default=None, description='Warehouse id or "all"'),
    stock_status: str | None = Query(
        default=None, description="low_stock, out_of_stock, normal or all"
    ),
    search: str | None = Query(default=None, max_length=100),
    start_date: date | None = None,
    end_date: date | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> PartFilter:
    """Build a PartFilter from query parameters."""
    return PartFilter(
        category=parse_enum("category", category, PartCategory),
        warehouse_id=parse_warehouse(warehouse_id),
        stock_status=parse_enum("stock_status", stock_status, StockStatus),
        search=None if _unset(search) else search,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )


def get_finance_filter(
    type: str | None = Query(default=None, description='Ingreso, Egreso or "all"'),
    category: str | None = Query(default=None, description='Exact category or "all"'),
    payment_method: str | None = Query(default=None),
    search: str | None = Query(default=None, max_length=100),
    start_date: date | None = None,
    end_date: date | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> FinanceFilter:
    """Build a FinanceFilter from query parameters."""
    return FinanceFilter(
        type=parse_enum("type", type, FinanceType),
        category=None if _unset(category) else category,
        payment_method=parse_enum("payment_method", payment_method, PaymentMethod),
        search=None if _unset(search) else search,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )


# Warehouse use cases
def get_create_warehouse_use_case() -> CreateWarehouseUseCase:
    return CreateWarehouseUseCase()


def get_get_warehouse_use_case() -> GetWarehouseUseCase:
    return GetWarehouseUseCase()


def get_list_warehouses_use_case() -> ListWarehousesUseCase:
    return ListWarehousesUseCase()


def get_delete_warehouse_use_case() -> DeleteWarehouseUseCase:
    return DeleteWarehouseUseCase()


# Part use cases
def get_create_part_use_case() -> CreatePartUseCase:
    return CreatePartUseCase()


def get_update_part_use_case() -> UpdatePartUseCase:
    return UpdatePartUseCase()


def get_delete_part_use_case() -> DeletePartUseCase:
    return DeletePartUseCase()


def get_apply_stock_movement_use_case() -> ApplyStockMovementUseCase:
    return ApplyStockMovementUseCase()


def get_get_part_use_case() -> GetPartUseCase:
    return GetPartUseCase()


def get_list_part_movements_use_case() -> ListPartMovementsUseCase:
    return ListPartMovementsUseCase()


def get_list_parts_use_case() -> ListPartsUseCase:
    return ListPartsUseCase()


def get_part_stats_use_case() -> GetPartStatsUseCase:
    return GetPartStatsUseCase()


# Finance use cases
def get_create_finance_record_use_case() -> CreateFinanceRecordUseCase:
    return CreateFinanceRecordUseCase()


def get_update_finance_record_use_case() -> UpdateFinanceRecordUseCase:
    return UpdateFinanceRecordUseCase()


def get_delete_finance_record_use_case() -> DeleteFinanceRecordUseCase:
    return DeleteFinanceRecordUseCase()


def get_get_finance_record_use_case() -> GetFinanceRecordUseCase:
    return GetFinanceRecordUseCase()


def get_list_finance_records_use_case() -> ListFinanceRecordsUseCase:
    return ListFinanceRecordsUseCase()


def get_list_finance_categories_use_case() -> ListFinanceCategoriesUseCase:
    return ListFinanceCategoriesUseCase()


def get_finance_stats_use_case() -> GetFinanceStatsUseCase:
    return GetFinanceStatsUseCase()
