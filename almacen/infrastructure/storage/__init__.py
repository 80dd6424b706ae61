"""Storage infrastructure implementations."""

from almacen.infrastructure.storage.sqlite import (
    SQLiteFinanceStore,
    SQLitePartStore,
    SQLiteWarehouseStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLitePartStore",
    "SQLiteFinanceStore",
    "SQLiteWarehouseStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
