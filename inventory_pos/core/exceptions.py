"""
Domain exceptions for the inventory POS application.

Every error belongs to one of four kinds: not found, duplicate key,
validation, or internal. The API layer maps each kind to a status code.
"""

from typing import Any


class InventoryPosError(Exception):
    """Base exception for all application errors."""

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


# Not Found Exceptions
class NotFoundError(InventoryPosError):
    """Referenced entity does not exist or is outside the tenant's scope."""

    def __init__(
        self,
        message: str,
        code: str = "NOT_FOUND",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, details=details)


class ClientNotFoundError(NotFoundError):
    """Tenant not found or inactive."""

    def __init__(self, client_id: str):
        super().__init__(
            f"Client not found: {client_id}",
            code="CLIENT_NOT_FOUND",
            details={"client_id": client_id},
        )


class PartyNotFoundError(NotFoundError):
    """Supplier or customer not found for the tenant."""

    def __init__(self, kind: str, party_id: int):
        super().__init__(
            f"{kind.capitalize()} with id '{party_id}' not found",
            code=f"{kind.upper()}_NOT_FOUND",
            details={"kind": kind, "party_id": party_id},
        )


class ProductNotFoundError(NotFoundError):
    """Product not found for the tenant."""

    def __init__(self, term: int | str):
        super().__init__(
            f"Product with id/name '{term}' not found",
            code="PRODUCT_NOT_FOUND",
            details={"term": term},
        )


class ProductStockNotFoundError(NotFoundError):
    """One or more product stocks (SKUs) not found for the tenant."""

    def __init__(self, stock_ids: list[int]):
        if len(stock_ids) == 1:
            message = f"ProductStock with id '{stock_ids[0]}' not found"
        else:
            message = (
                "Some ProductStock ids were not found. "
                f"NotFoundCount: ({len(stock_ids)})"
            )
        super().__init__(
            message,
            code="PRODUCT_STOCK_NOT_FOUND",
            details={"stock_ids": stock_ids, "not_found_count": len(stock_ids)},
        )


class VariantNotFoundError(NotFoundError):
    """Variant (dimension) not found for the tenant."""

    def __init__(self, term: int | str | None = None, message: str | None = None):
        super().__init__(
            message or f"Variant with id/name '{term}' not found",
            code="VARIANT_NOT_FOUND",
            details={"term": term},
        )


class VariantOptionNotFoundError(NotFoundError):
    """Variant option does not belong to any of the tenant's variants."""

    def __init__(self, option_id: int):
        super().__init__(
            f"Option id {option_id} does not exist",
            code="VARIANT_OPTION_NOT_FOUND",
            details={"option_id": option_id},
        )


class StockTransactionNotFoundError(NotFoundError):
    """Purchase or sale not found, or already inactive."""

    def __init__(self, kind: str, transaction_id: int):
        super().__init__(
            f"{kind.capitalize()} with id '{transaction_id}' not found",
            code=f"{kind.upper()}_NOT_FOUND",
            details={"kind": kind, "transaction_id": transaction_id},
        )


# Duplicate Key Exceptions
class DuplicateKeyError(InventoryPosError):
    """A uniqueness constraint would be violated."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="DUPLICATE_KEY", details=details)


# Validation Exceptions
class ValidationError(InventoryPosError):
    """Input violates a domain rule."""

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
    """Decrement would leave on-hand quantity below zero."""

    def __init__(self, stock_id: int, requested: float, available: float):
        super().__init__(
            field="quantity",
            message=(
                f"Insufficient stock for ProductStock '{stock_id}': "
                f"requested {requested}, available {available}"
            ),
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "stock_id": stock_id,
                "requested": requested,
                "available": available,
            }
        )


class VariantLockedError(ValidationError):
    """Variant is bound to a product and can no longer be modified."""

    def __init__(self, variant_id: int):
        super().__init__(
            field="variant",
            message=f"Variant with id '{variant_id}' cannot be modified",
            value=variant_id,
        )
        self.code = "VARIANT_LOCKED"


# Internal Exceptions
class InternalError(InventoryPosError):
    """Unexpected failure. Detail is logged, never returned to the caller."""

    pass


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConcurrentUpdateError(InternalError):
    """Optimistic concurrency check kept failing for a row."""

    def __init__(self, entity: str, entity_id: int, attempts: int):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently ({attempts} attempts)",
            code="CONCURRENT_UPDATE",
            details={"entity": entity, "entity_id": entity_id, "attempts": attempts},
        )


class ConfigurationError(InventoryPosError):
    """Configuration error."""

    pass
