"""API middleware."""

from inventory_pos.api.middleware.error_handler import ErrorHandlerMiddleware
from inventory_pos.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
