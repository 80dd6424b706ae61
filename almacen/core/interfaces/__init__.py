"""Core interfaces (ports) for dependency injection."""

from almacen.core.interfaces.clock import IClock
from almacen.core.interfaces.finance_store import IFinanceStore
from almacen.core.interfaces.part_store import IPartStore
from almacen.core.interfaces.warehouse_store import IWarehouseStore

__all__ = [
    # Storage interfaces
    "IPartStore",
    "IFinanceStore",
    "IWarehouseStore",
    # Time
    "IClock",
]
