"""Aggregated views produced by the stats aggregator."""

from datetime import date

from pydantic import BaseModel, Field

from almacen.core.entities.finance import FinanceType


class CategoryStockSummary(BaseModel):
    """Per-category part counts."""

    category: str
    count: int = 0
    total_stock: float = 0.0
    low_stock: int = 0  # parts whose status is not normal


class PartStats(BaseModel):
    """Summary over a set of parts."""

    total_parts: int = 0
    low_stock_parts: int = 0
    out_of_stock_parts: int = 0
    total_value: float = 0.0
    parts_by_category: list[CategoryStockSummary] = Field(default_factory=list)


class CategoryAmount(BaseModel):
    """Summed amount for one finance category."""

    category: str
    total: float = 0.0
    count: int = 0


class MonthlyTrendPoint(BaseModel):
    """Summed amount for one (year, month, type) bucket."""

    year: int
    month: int
    type: FinanceType
    total: float = 0.0


class FinanceSummary(BaseModel):
    """Totals inside the stats window."""

    total_income: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0
    period: str
    start_date: date
    end_date: date  # exclusive


class FinanceStats(BaseModel):
    """Finance summary, category breakdowns and the monthly trend."""

    summary: FinanceSummary
    income_by_category: list[CategoryAmount] = Field(default_factory=list)
    expenses_by_category: list[CategoryAmount] = Field(default_factory=list)
    monthly_trend: list[MonthlyTrendPoint] = Field(default_factory=list)
