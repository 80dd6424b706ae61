"""Core business services."""

from almacen.core.services import finance_rules, stock_ledger
from almacen.core.services.query_filter import QueryFilterService
from almacen.core.services.stats_aggregator import (
    PERIOD_TOKENS,
    explicit_window,
    finance_stats,
    monthly_trend,
    part_stats,
    resolve_period,
)

__all__ = [
    # Rule modules
    "stock_ledger",
    "finance_rules",
    # Query layer
    "QueryFilterService",
    # Stats
    "PERIOD_TOKENS",
    "resolve_period",
    "explicit_window",
    "part_stats",
    "finance_stats",
    "monthly_trend",
]
