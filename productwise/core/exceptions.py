"""
Domain exceptions for the ProductWise application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class ProductWiseError(Exception):
    """Base exception for all ProductWise errors."""

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


# Storage Exceptions
class StorageError(ProductWiseError):
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


class MovementQueryError(StorageError):
    """A per-movement query failed; the whole report is abandoned."""

    def __init__(self, movement: str, error: str):
        # The underlying message is surfaced verbatim to the caller
        super().__init__(
            error,
            code="MOVEMENT_QUERY_FAILED",
            details={"movement": movement, "error": error},
        )
        self.movement = movement


# Validation Exceptions
class ValidationError(ProductWiseError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )
        self.field = field


class EmptySelectionError(ValidationError):
    """A required report selection list is empty."""

    MESSAGES = {
        "productIds": "Select at least one product",
        "warehouseIds": "Select at least one warehouse",
        "movements": "Select at least one movement type",
    }

    def __init__(self, field: str):
        super().__init__(field=field, message=self.MESSAGES[field])
        self.code = "EMPTY_SELECTION"


class UnknownMovementError(ValidationError):
    """Movement name is not a known category or alias."""

    def __init__(self, movement: str):
        super().__init__(
            field="movements",
            message=f"Unknown movement type: {movement}",
            value=movement,
        )
        self.code = "UNKNOWN_MOVEMENT"


class ConfigurationError(ProductWiseError):
    """Configuration error."""

    pass
