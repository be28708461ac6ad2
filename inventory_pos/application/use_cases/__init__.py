"""Application use cases."""

from inventory_pos.application.use_cases.adjust_inventory import (
    AdjustInventoryResult,
    AdjustInventoryUseCase,
)
from inventory_pos.application.use_cases.create_product import (
    CreateProductResult,
    CreateProductWithVariantsUseCase,
    CreateUniqueProductUseCase,
)
from inventory_pos.application.use_cases.create_purchase import CreatePurchaseUseCase
from inventory_pos.application.use_cases.create_sale import CreateSaleUseCase
from inventory_pos.application.use_cases.delete_stock_transaction import (
    DeletePurchaseUseCase,
    DeleteSaleUseCase,
)
from inventory_pos.application.use_cases.manage_clients import (
    CreateClientUseCase,
    CreatePartyUseCase,
)
from inventory_pos.application.use_cases.manage_variants import (
    CreateVariantUseCase,
    DeleteVariantUseCase,
    UpdateVariantUseCase,
    VariantResult,
)
from inventory_pos.application.use_cases.stock_transaction import StockTransactionResult
from inventory_pos.application.use_cases.update_product import UpdateProductUseCase

__all__ = [
    "CreateClientUseCase",
    "CreatePartyUseCase",
    "CreateVariantUseCase",
    "UpdateVariantUseCase",
    "DeleteVariantUseCase",
    "VariantResult",
    "CreateUniqueProductUseCase",
    "CreateProductWithVariantsUseCase",
    "UpdateProductUseCase",
    "CreateProductResult",
    "CreatePurchaseUseCase",
    "CreateSaleUseCase",
    "DeletePurchaseUseCase",
    "DeleteSaleUseCase",
    "StockTransactionResult",
    "AdjustInventoryUseCase",
    "AdjustInventoryResult",
]
