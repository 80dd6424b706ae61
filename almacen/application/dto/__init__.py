"""Data Transfer Objects for API requests and responses."""

from almacen.application.dto.requests import (
    CreateFinanceRecordRequest,
    CreatePartRequest,
    CreateWarehouseRequest,
    FinanceStatsRequest,
    RecurringConfigRequest,
    StockMovementRequest,
    SupplierRequest,
    UpdateFinanceRecordRequest,
    UpdatePartRequest,
)
from almacen.application.dto.responses import (
    ErrorResponse,
    FinanceCategoriesResponse,
    FinanceRecordListResponse,
    FinanceRecordResponse,
    FinanceStatsResponse,
    HealthResponse,
    MovementListResponse,
    PaginatedResponse,
    PartListResponse,
    PartResponse,
    PartStatsResponse,
    ProviderHealthResponse,
    StockMovementResponse,
    StockMovementResultResponse,
    WarehouseListResponse,
    WarehouseResponse,
)

__all__ = [
    # Requests
    "CreateWarehouseRequest",
    "SupplierRequest",
    "CreatePartRequest",
    "UpdatePartRequest",
    "StockMovementRequest",
    "RecurringConfigRequest",
    "CreateFinanceRecordRequest",
    "UpdateFinanceRecordRequest",
    "FinanceStatsRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "PaginatedResponse",
    "WarehouseResponse",
    "WarehouseListResponse",
    "PartResponse",
    "PartListResponse",
    "PartStatsResponse",
    "StockMovementResponse",
    "StockMovementResultResponse",
    "MovementListResponse",
    "FinanceRecordResponse",
    "FinanceRecordListResponse",
    "FinanceStatsResponse",
    "FinanceCategoriesResponse",
]
