"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


# --- Shared ---


class ProviderHealthResponse(BaseModel):
    """Health of one backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PART_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class PaginatedResponse(BaseModel):
    """Base for page-numbered listings."""

    total: int
    page: int
    limit: int
    pages: int
    count: int


# --- Warehouses ---


class WarehouseResponse(BaseModel):
    id: int
    name: str
    address: str
    department: str
    created_at: datetime
    updated_at: datetime


class WarehouseListResponse(BaseModel):
    items: list[WarehouseResponse]
    total: int


# --- Parts ---


class SupplierResponse(BaseModel):
    name: str | None = None
    contact: str | None = None
    phone: str | None = None
    email: str | None = None


class StockMovementResponse(BaseModel):
    """Stock movement response DTO."""

    id: int
    part_id: int
    movement_type: str
    quantity: float
    reason: str
    reference: str | None = None
    previous_stock: float
    new_stock: float
    moved_at: datetime


class PartResponse(BaseModel):
    """Part with derived status and value."""

    id: int
    name: str
    part_number: str
    category: str
    warehouse_id: int
    current_stock: float
    minimum_stock: float
    maximum_stock: float | None = None
    unit: str
    unit_price: float | None = None
    supplier: SupplierResponse | None = None
    location: str | None = None
    description: str | None = None
    notes: str | None = None
    status: str
    stock_value: float
    version: int
    created_at: datetime
    updated_at: datetime
    movements: list[StockMovementResponse] = Field(default_factory=list)


class PartListResponse(PaginatedResponse):
    items: list[PartResponse]


class StockMovementResultResponse(BaseModel):
    """Part after a movement, plus the appended movement."""

    part: PartResponse
    movement: StockMovementResponse
    expense_record_id: int | None = None  # purchase expense written for an Entrada


class MovementListResponse(BaseModel):
    part_id: int
    items: list[StockMovementResponse]


class CategoryStockSummaryResponse(BaseModel):
    category: str
    count: int
    total_stock: float
    low_stock: int


class PartStatsResponse(BaseModel):
    total_parts: int
    low_stock_parts: int
    out_of_stock_parts: int
    total_value: float
    parts_by_category: list[CategoryStockSummaryResponse]


# --- Finance ---


class RecurringConfigResponse(BaseModel):
    frequency: str | None = None
    next_date: date | None = None
    end_date: date | None = None
    is_active: bool = True


class FinanceRecordResponse(BaseModel):
    """Finance record response DTO."""

    id: int
    type: str
    category: str
    subcategory: str | None = None
    description: str
    amount: float
    record_date: date
    payment_method: str
    reference: str | None = None
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)
    source_type: str
    source_id: str | None = None
    is_recurring: bool
    recurring_config: RecurringConfigResponse | None = None
    version: int
    created_at: datetime
    updated_at: datetime


class FinanceRecordListResponse(PaginatedResponse):
    items: list[FinanceRecordResponse]


class CategoryAmountResponse(BaseModel):
    category: str
    total: float
    count: int


class MonthlyTrendPointResponse(BaseModel):
    year: int
    month: int
    type: str
    total: float


class FinanceSummaryResponse(BaseModel):
    total_income: float
    total_expenses: float
    net_income: float
    period: str
    start_date: date
    end_date: date  # exclusive


class FinanceStatsResponse(BaseModel):
    summary: FinanceSummaryResponse
    income_by_category: list[CategoryAmountResponse]
    expenses_by_category: list[CategoryAmountResponse]
    monthly_trend: list[MonthlyTrendPointResponse]


class CategoryUsageResponse(BaseModel):
    category: str
    subcategories: list[str]


class FinanceCategoriesResponse(BaseModel):
    """Categories in use plus the advisory recommended lists."""

    categories: list[CategoryUsageResponse]
    recommended_categories: dict[str, list[str]]
