"""Abstract interface for finance record storage."""

from abc import ABC, abstractmethod

from almacen.core.entities.finance import CategoryUsage, FinanceRecord, FinanceType


class IFinanceStore(ABC):
    """Interface for finance record persistence."""

    @abstractmethod
    async def create_record(self, record: FinanceRecord) -> FinanceRecord:
        """Create a new finance record."""
        pass

    @abstractmethod
    async def get_record(self, record_id: int) -> FinanceRecord | None:
        """Get finance record by ID."""
        pass

    @abstractmethod
    async def update_record(
        self, record: FinanceRecord, expected_version: int
    ) -> FinanceRecord:
        """Replace a record's fields if its version still matches."""
        pass

    @abstractmethod
    async def delete_record(self, record_id: int) -> bool:
        """Delete a record. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_records(self, type: FinanceType | None = None) -> list[FinanceRecord]:
        """Snapshot of records in insertion order."""
        pass

    @abstractmethod
    async def list_categories(self, type: FinanceType | None = None) -> list[CategoryUsage]:
        """Distinct categories with their non-empty subcategories."""
        pass
