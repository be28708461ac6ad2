"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action

Domain errors map by family: not found 404, duplicate key 409,
validation 400, internal 500. Internal errors never expose their detail.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from inventory_pos.application.dto.responses import ErrorResponse
from inventory_pos.config import get_logger
from inventory_pos.core.exceptions import (
    ConfigurationError,
    DuplicateKeyError,
    InternalError,
    InventoryPosError,
    NotFoundError,
    ValidationError,
)

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error. Check server logs"

# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateKeyError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "CLIENT_NOT_FOUND": "Check the X-Client-Id header. Create the tenant with POST /api/clients.",
    "SUPPLIER_NOT_FOUND": "Check the supplier_id and try GET /api/suppliers.",
    "CUSTOMER_NOT_FOUND": "Check the customer_id and try GET /api/customers.",
    "PRODUCT_NOT_FOUND": "Check the product id or name and try GET /api/products.",
    "PRODUCT_STOCK_NOT_FOUND": "Check the product_stock_id values against GET /api/products.",
    "VARIANT_NOT_FOUND": "Create variants first with POST /api/variants.",
    "VARIANT_OPTION_NOT_FOUND": "Check the option ids against GET /api/variants.",
    "PURCHASE_NOT_FOUND": "The purchase does not exist or was already deleted.",
    "SALE_NOT_FOUND": "The sale does not exist or was already deleted.",
    "DUPLICATE_KEY": "Use a different name or update the existing record.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or add stock before retrying.",
    "VARIANT_LOCKED": "Variants used by a product cannot be modified.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "CONCURRENT_UPDATE": "The record is under heavy concurrent use. Retry the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with existing data.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to a standardized JSON response."""
    status_code = _status_for(exc)

    if isinstance(exc, InventoryPosError):
        error_code = exc.code
    else:
        error_code = "INTERNAL_ERROR"

    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=exc.__class__.__name__,
            error=str(exc),
            details=exc.details if isinstance(exc, InventoryPosError) else None,
            traceback=traceback.format_exc(),
        )
        message = INTERNAL_ERROR_MESSAGE
        detail = None
    else:
        logger.warning(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            error_code=error_code,
            error=str(exc),
        )
        message = str(exc)
        detail = None
        if isinstance(exc, ValidationError):
            message = exc.details["message"]
            detail = f"field: {exc.details['field']}"

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Last line of defence for exceptions the registered handlers do not
    cover; they become a generic 500.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(InventoryPosError)
    async def domain_exception_handler(
        request: Request,
        exc: InventoryPosError,
    ) -> JSONResponse:
        """Handle domain errors by family."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    if status_code == 400:
        return "BAD_REQUEST"
    if status_code == 422:
        return "UNPROCESSABLE_ENTITY"
    return "HTTP_ERROR"
