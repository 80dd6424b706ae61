"""Abstract interface for part and movement storage."""

from abc import ABC, abstractmethod

from almacen.core.entities.part import Part, PartCategory, StockMovement


class IPartStore(ABC):
    """
    Interface for part persistence.

    Implementations serialize mutations per part: every write checks the
    part's version and raises ConflictError when it has moved on.
    """

    @abstractmethod
    async def create_part(self, part: Part) -> Part:
        """Insert a part together with its opening movements."""
        pass

    @abstractmethod
    async def get_part(self, part_id: int, with_movements: bool = True) -> Part | None:
        """Get part by ID."""
        pass

    @abstractmethod
    async def update_part(self, part: Part, expected_version: int) -> Part:
        """Persist non-stock field changes."""
        pass

    @abstractmethod
    async def append_movement(
        self, part: Part, movement: StockMovement, expected_version: int
    ) -> tuple[Part, StockMovement]:
        """Append a movement and set current_stock in one atomic step."""
        pass

    @abstractmethod
    async def delete_part(self, part_id: int) -> bool:
        """Delete a part and its history. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_parts(
        self,
        warehouse_id: int | None = None,
        category: PartCategory | None = None,
    ) -> list[Part]:
        """Snapshot of parts in insertion order, movements not loaded."""
        pass

    @abstractmethod
    async def get_movements(
        self, part_id: int, limit: int = 100, offset: int = 0
    ) -> list[StockMovement]:
        """Get movements for a part, newest first."""
        pass
