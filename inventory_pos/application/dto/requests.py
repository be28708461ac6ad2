"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from inventory_pos.core.entities.adjustment import AdjustmentType
from inventory_pos.core.entities.client import Currency
from inventory_pos.core.entities.product import MeasureUnitType, Status
from inventory_pos.core.entities.transaction import DocumentType

# --- Tenants and parties ---


class CreateClientRequest(BaseModel):
    """Request to register a tenant."""

    name: str = Field(..., min_length=1, description="Tenant display name")
    main_currency: Currency = Field(
        default=Currency.USD,
        description="Currency every cost is accounted in",
    )


class CreatePartyRequest(BaseModel):
    """Request to create a supplier or a customer."""

    name: str = Field(..., min_length=1, description="Unique per tenant and kind")
    identification: str | None = Field(default=None, description="Tax or national id")
    email: str | None = None
    phone_number: str | None = None


# --- Variants ---


class CreateVariantRequest(BaseModel):
    """Request to create a variant with its options."""

    name: str = Field(..., min_length=1, examples=["Size"])
    description: str | None = Field(default=None, min_length=1)
    options: list[str] = Field(..., min_length=1, examples=[["S", "M", "L"]])


class UpdateVariantOptionRequest(BaseModel):
    """One option change.

    - name only: create the option
    - id and name: rename the option
    - id only: delete the option
    """

    id: int | None = None
    name: str | None = None


class UpdateVariantRequest(BaseModel):
    """Request to update a variant that no product uses yet."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    options: list[UpdateVariantOptionRequest] | None = None


# --- Products ---


class ProductRequest(BaseModel):
    """Descriptive and pricing fields shared by both product kinds."""

    reference: str | None = Field(default=None, min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = Field(default=None, min_length=1)
    unit_type: MeasureUnitType = MeasureUnitType.UNIT
    base_cost: float = Field(..., gt=0, description="Anchor cost, also the starting average")
    price: float = Field(..., gt=0, description="Sale price")
    metadata: dict[str, Any] = Field(default_factory=dict)


class StockRequest(BaseModel):
    """Initial stock of one SKU."""

    initial_quantity: int = Field(..., ge=0)
    status: Status | None = Field(default=None, description="Defaults to active")


class CreateUniqueProductRequest(BaseModel):
    """Product with a single implicit SKU."""

    product: ProductRequest
    stock: StockRequest


class ItemVariantRequest(BaseModel):
    """Initial stock for one option combination."""

    option_combination: list[int] = Field(
        ..., min_length=1, description="Variant option ids, one per variant"
    )
    stock: StockRequest


class CreateProductWithVariantsRequest(BaseModel):
    """Parent product; unlisted combinations are created inactive with 0 stock."""

    product: ProductRequest
    items_variants: list[ItemVariantRequest] = Field(..., min_length=1)


class UpdateProductRequest(BaseModel):
    """Partial product update. Cost-basis fields are not editable."""

    reference: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    unit_type: MeasureUnitType | None = None
    base_cost: float | None = Field(default=None, gt=0)
    price: float | None = Field(default=None, gt=0)
    metadata: dict[str, Any] | None = None
    status: Status | None = None


# --- Stock transactions ---


class StockTransactionRequest(BaseModel):
    """Header fields shared by purchases and sales."""

    document_type: DocumentType = DocumentType.NONE
    invoice_number: str | None = None
    control_number: str | None = None
    document_date: date | None = Field(default=None, description="Defaults to today")
    currency: Currency = Field(
        ...,
        description=(
            "If it differs from the tenant's main currency, "
            "currency_exchange_from, currency_exchange_to and exchange_rate are required"
        ),
    )
    currency_exchange_from: Currency | None = None
    currency_exchange_to: Currency | None = None
    exchange_rate: float | None = Field(default=None, gt=0)
    metadata: dict[str, Any] = Field(default_factory=dict)
    comment: str | None = None


class PurchaseItemRequest(BaseModel):
    """A purchase line."""

    product_stock_id: int = Field(..., gt=0)
    quantity: float = Field(..., gt=0)
    amount: float = Field(..., gt=0, description="Unit cost in the purchase currency")
    update_product_base_cost: bool = False


class SaleItemRequest(BaseModel):
    """A sale line. The unit amount always comes from the product price."""

    product_stock_id: int = Field(..., gt=0)
    quantity: float = Field(..., gt=0)
    amount: float | None = Field(default=None, description="Ignored")


class CreatePurchaseRequest(StockTransactionRequest):
    supplier_id: int = Field(..., gt=0)
    purchase_items: list[PurchaseItemRequest] = Field(..., min_length=1)


class CreateSaleRequest(StockTransactionRequest):
    customer_id: int = Field(..., gt=0)
    sale_items: list[SaleItemRequest] = Field(..., min_length=1)


# --- Inventory adjustments ---


class CreateInventoryAdjustmentRequest(BaseModel):
    """Manual correction of a SKU quantity."""

    product_stock_id: int = Field(..., gt=0)
    adjustment_type: AdjustmentType
    quantity: float = Field(..., gt=0)
    metadata: dict[str, Any] = Field(default_factory=dict)
    comment: str = Field(..., min_length=5, description="Reason for the adjustment")
