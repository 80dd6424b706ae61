"""
Domain exceptions for the Almacen application.

Every core operation either returns a value or raises exactly one of
these. None of them is retried inside the ledger.
"""

from typing import Any


class AlmacenError(Exception):
    """Base exception for all Almacen errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(AlmacenError):
    """Input is malformed or violates a ledger rule."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(ValidationError):
    """An outgoing movement would drive stock below zero."""

    def __init__(self, part_id: int | None, requested: float, available: float):
        super().__init__(
            field="quantity",
            message=(
                f"Insufficient stock: requested {requested}, available {available}"
            ),
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "part_id": part_id,
                "requested": requested,
                "available": available,
            }
        )


# Lookup Exceptions
class NotFoundError(AlmacenError):
    """Referenced record does not exist."""

    pass


class PartNotFoundError(NotFoundError):
    """Part not found in storage."""

    def __init__(self, part_id: int):
        super().__init__(
            f"Part not found: {part_id}",
            code="PART_NOT_FOUND",
            details={"part_id": part_id},
        )


class FinanceRecordNotFoundError(NotFoundError):
    """Finance record not found in storage."""

    def __init__(self, record_id: int):
        super().__init__(
            f"Finance record not found: {record_id}",
            code="FINANCE_RECORD_NOT_FOUND",
            details={"record_id": record_id},
        )


class WarehouseNotFoundError(NotFoundError):
    """Warehouse not found in storage."""

    def __init__(self, warehouse_id: int):
        super().__init__(
            f"Warehouse not found: {warehouse_id}",
            code="WAREHOUSE_NOT_FOUND",
            details={"warehouse_id": warehouse_id},
        )


# Concurrency Exceptions
class ConflictError(AlmacenError):
    """A concurrent mutation won the race for the same record."""

    def __init__(self, entity: str, entity_id: int, expected_version: int | None = None):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently; reload and retry",
            code="CONFLICT",
            details={
                "entity": entity,
                "entity_id": entity_id,
                "expected_version": expected_version,
            },
        )


# Identity Exceptions
class AuthError(AlmacenError):
    """Caller identity could not be established."""

    def __init__(self, reason: str = "Not authenticated"):
        super().__init__(reason, code="AUTH_ERROR", details={"reason": reason})


# Storage Exceptions
class StorageError(AlmacenError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(AlmacenError):
    """Configuration error."""

    pass
