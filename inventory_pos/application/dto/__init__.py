"""Request and response DTOs."""

from inventory_pos.application.dto.requests import (
    CreateClientRequest,
    CreateInventoryAdjustmentRequest,
    CreatePartyRequest,
    CreateProductWithVariantsRequest,
    CreatePurchaseRequest,
    CreateSaleRequest,
    CreateUniqueProductRequest,
    CreateVariantRequest,
    UpdateProductRequest,
    UpdateVariantRequest,
)
from inventory_pos.application.dto.responses import (
    AdjustInventoryResponse,
    ClientResponse,
    ErrorResponse,
    HealthResponse,
    PartyResponse,
    ProductResponse,
    StockTransactionResponse,
    VariantResponse,
)

__all__ = [
    "CreateClientRequest",
    "CreatePartyRequest",
    "CreateVariantRequest",
    "UpdateVariantRequest",
    "CreateUniqueProductRequest",
    "CreateProductWithVariantsRequest",
    "UpdateProductRequest",
    "CreatePurchaseRequest",
    "CreateSaleRequest",
    "CreateInventoryAdjustmentRequest",
    "ClientResponse",
    "PartyResponse",
    "VariantResponse",
    "ProductResponse",
    "StockTransactionResponse",
    "AdjustInventoryResponse",
    "HealthResponse",
    "ErrorResponse",
]
