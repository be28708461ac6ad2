"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
Built from domain entities with ``model_validate(entity, from_attributes=True)``.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from inventory_pos.core.entities.adjustment import AdjustmentType
from inventory_pos.core.entities.client import Currency
from inventory_pos.core.entities.party import PartyKind
from inventory_pos.core.entities.product import MeasureUnitType, ProductType, Status, StockType
from inventory_pos.core.entities.transaction import DocumentType, TransactionKind


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_STOCK_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


# --- Tenants and parties ---


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    main_currency: Currency
    is_active: bool
    created_at: datetime


class PartyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    kind: PartyKind
    name: str
    identification: str | None = None
    email: str | None = None
    phone_number: str | None = None
    is_active: bool
    created_at: datetime


class PartyListResponse(PaginatedResponse):
    parties: list[PartyResponse]


# --- Variants ---


class VariantOptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class VariantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    can_edit: bool
    options: list[VariantOptionResponse]
    created_at: datetime
    updated_at: datetime


class VariantListResponse(BaseModel):
    variants: list[VariantResponse]
    total: int


# --- Products ---


class ProductStockResponse(BaseModel):
    """A SKU in response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    type: StockType
    option_combination: list[int]
    initial_quantity: float
    quantity: float
    cost: float
    status: Status


class ProductResponse(BaseModel):
    """Product with its SKUs and cost basis."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: ProductType
    reference: str | None = None
    name: str
    description: str | None = None
    unit_type: MeasureUnitType
    base_cost: float
    average_cost: float
    total_for_average_cost: float
    price: float
    status: Status
    metadata: dict[str, Any] = Field(default_factory=dict)
    variant_ids: list[int] = Field(default_factory=list)
    stocks: list[ProductStockResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ProductListResponse(PaginatedResponse):
    products: list[ProductResponse]


# --- Stock transactions ---


class StockTransactionItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_stock_id: int
    product_id: int
    quantity: float
    amount: float
    update_product_base_cost: bool
    is_active: bool


class StockTransactionResponse(BaseModel):
    """A purchase or a sale with its lines."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    kind: TransactionKind
    party_id: int
    document_type: DocumentType
    invoice_number: str | None = None
    control_number: str | None = None
    document_date: date
    currency: Currency
    currency_exchange_from: Currency
    currency_exchange_to: Currency
    exchange_rate: float
    total: float
    comment: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    items: list[StockTransactionItemResponse]
    created_at: datetime
    updated_at: datetime


class StockTransactionListResponse(PaginatedResponse):
    transactions: list[StockTransactionResponse]


# --- Inventory adjustments ---


class InventoryAdjustmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_stock_id: int
    adjustment_type: AdjustmentType
    quantity: float
    comment: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class AdjustInventoryResponse(BaseModel):
    """Recorded adjustment and the SKU after the change."""

    adjustment: InventoryAdjustmentResponse
    stock: ProductStockResponse


class InventoryAdjustmentListResponse(PaginatedResponse):
    adjustments: list[InventoryAdjustmentResponse]
