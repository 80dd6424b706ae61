"""Filter criteria and paged results for listing and stats."""

from datetime import date
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from almacen.core.entities.finance import FinanceType, PaymentMethod
from almacen.core.entities.part import PartCategory, StockStatus

T = TypeVar("T")

ALL = "all"


class PartFilter(BaseModel):
    """
    Criteria for selecting parts.

    A field left as None (or "all" at the API boundary) imposes no
    constraint. page/limit of None fall back to the query defaults.
    """

    category: PartCategory | None = None
    warehouse_id: int | None = None
    stock_status: StockStatus | None = None
    search: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    page: int | None = None
    limit: int | None = None


class FinanceFilter(BaseModel):
    """Criteria for selecting finance records."""

    type: FinanceType | None = None
    category: str | None = None
    payment_method: PaymentMethod | None = None
    search: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    page: int | None = None
    limit: int | None = None


class Page(BaseModel, Generic[T]):
    """One page of an ordered result set."""

    items: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0
