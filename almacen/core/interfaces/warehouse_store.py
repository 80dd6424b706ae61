"""Abstract interface for warehouse storage."""

from abc import ABC, abstractmethod

from almacen.core.entities.warehouse import Warehouse


class IWarehouseStore(ABC):
    """Interface for warehouse persistence."""

    @abstractmethod
    async def create(self, warehouse: Warehouse) -> Warehouse:
        """Create a new warehouse."""
        pass

    @abstractmethod
    async def get(self, warehouse_id: int) -> Warehouse | None:
        """Get warehouse by ID."""
        pass

    @abstractmethod
    async def list_warehouses(
        self,
        department: str | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Warehouse]:
        """List warehouses, newest first."""
        pass

    @abstractmethod
    async def count_parts(self, warehouse_id: int) -> int:
        """Number of parts stored in the warehouse."""
        pass

    @abstractmethod
    async def delete(self, warehouse_id: int) -> bool:
        """Delete a warehouse. Returns False if it did not exist."""
        pass
