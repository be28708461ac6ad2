"""
Dependency injection container for FastAPI.

Provides stores, use cases and the resolved tenant to route handlers.
"""

from functools import lru_cache

from fastapi import Depends, Request

from inventory_pos.application.use_cases import (
    AdjustInventoryUseCase,
    CreateClientUseCase,
    CreatePartyUseCase,
    CreateProductWithVariantsUseCase,
    CreatePurchaseUseCase,
    CreateSaleUseCase,
    CreateUniqueProductUseCase,
    CreateVariantUseCase,
    DeletePurchaseUseCase,
    DeleteSaleUseCase,
    DeleteVariantUseCase,
    UpdateProductUseCase,
    UpdateVariantUseCase,
)
from inventory_pos.config import Settings, get_settings
from inventory_pos.core.exceptions import ClientNotFoundError, ValidationError
from inventory_pos.infrastructure.storage.sqlite import (
    SQLiteAdjustmentStore,
    SQLiteClientStore,
    SQLitePartyStore,
    SQLiteProductStore,
    SQLiteStockTransactionStore,
    SQLiteVariantStore,
    get_adjustment_store,
    get_client_store,
    get_party_store,
    get_product_store,
    get_transaction_store,
    get_variant_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_cli_store() -> SQLiteClientStore:
    """Get client store."""
    return await get_client_store()


async def get_pty_store() -> SQLitePartyStore:
    """Get party store."""
    return await get_party_store()


async def get_var_store() -> SQLiteVariantStore:
    """Get variant store."""
    return await get_variant_store()


async def get_prod_store() -> SQLiteProductStore:
    """Get product store."""
    return await get_product_store()


async def get_tx_store() -> SQLiteStockTransactionStore:
    """Get stock transaction store."""
    return await get_transaction_store()


async def get_adj_store() -> SQLiteAdjustmentStore:
    """Get adjustment store."""
    return await get_adjustment_store()


# Tenant dependency
async def get_client_id(
    request: Request,
    store: SQLiteClientStore = Depends(get_cli_store),
) -> str:
    """
    Resolve the tenant from the client header.

    Raises:
        ValidationError: header missing
        ClientNotFoundError: unknown or inactive tenant
    """
    header = get_app_settings().api.client_header
    client_id = request.headers.get(header)
    if not client_id:
        raise ValidationError(field=header, message=f"The {header} header is required")

    client = await store.get_client(client_id)
    if client is None or not client.is_active:
        raise ClientNotFoundError(client_id)
    return client_id


# Client and party use cases
def get_create_client_use_case() -> CreateClientUseCase:
    """Get create client use case."""
    return CreateClientUseCase()


def get_create_party_use_case() -> CreatePartyUseCase:
    """Get create party use case."""
    return CreatePartyUseCase()


# Variant use cases
def get_create_variant_use_case() -> CreateVariantUseCase:
    """Get create variant use case."""
    return CreateVariantUseCase()


def get_update_variant_use_case() -> UpdateVariantUseCase:
    """Get update variant use case."""
    return UpdateVariantUseCase()


def get_delete_variant_use_case() -> DeleteVariantUseCase:
    """Get delete variant use case."""
    return DeleteVariantUseCase()


# Product use cases
def get_create_unique_product_use_case() -> CreateUniqueProductUseCase:
    """Get create unique product use case."""
    return CreateUniqueProductUseCase()


def get_create_product_with_variants_use_case() -> CreateProductWithVariantsUseCase:
    """Get create product with variants use case."""
    return CreateProductWithVariantsUseCase()


def get_update_product_use_case() -> UpdateProductUseCase:
    """Get update product use case."""
    return UpdateProductUseCase()


# Stock transaction use cases
def get_create_purchase_use_case() -> CreatePurchaseUseCase:
    """Get create purchase use case."""
    return CreatePurchaseUseCase()


def get_delete_purchase_use_case() -> DeletePurchaseUseCase:
    """Get delete purchase use case."""
    return DeletePurchaseUseCase()


def get_create_sale_use_case() -> CreateSaleUseCase:
    """Get create sale use case."""
    return CreateSaleUseCase()


def get_delete_sale_use_case() -> DeleteSaleUseCase:
    """Get delete sale use case."""
    return DeleteSaleUseCase()


# Inventory use case
def get_adjust_inventory_use_case() -> AdjustInventoryUseCase:
    """Get adjust inventory use case."""
    return AdjustInventoryUseCase()
