"""SQLite storage implementations."""

from almacen.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from almacen.infrastructure.storage.sqlite.finance_store import SQLiteFinanceStore
from almacen.infrastructure.storage.sqlite.part_store import SQLitePartStore
from almacen.infrastructure.storage.sqlite.warehouse_store import SQLiteWarehouseStore

# Singleton instances
_part_store: SQLitePartStore | None = None
_finance_store: SQLiteFinanceStore | None = None
_warehouse_store: SQLiteWarehouseStore | None = None


async def get_part_store() -> SQLitePartStore:
    """Get singleton part store instance."""
    global _part_store
    if _part_store is None:
        _part_store = SQLitePartStore()
    return _part_store


async def get_finance_store() -> SQLiteFinanceStore:
    """Get singleton finance record store instance."""
    global _finance_store
    if _finance_store is None:
        _finance_store = SQLiteFinanceStore()
    return _finance_store


async def get_warehouse_store() -> SQLiteWarehouseStore:
    """Get singleton warehouse store instance."""
    global _warehouse_store
    if _warehouse_store is None:
        _warehouse_store = SQLiteWarehouseStore()
    return _warehouse_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLitePartStore",
    "SQLiteFinanceStore",
    "SQLiteWarehouseStore",
    # Factory functions
    "get_part_store",
    "get_finance_store",
    "get_warehouse_store",
]
