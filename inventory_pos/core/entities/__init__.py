"""Core domain entities."""

from inventory_pos.core.entities.adjustment import AdjustmentType, InventoryAdjustment
from inventory_pos.core.entities.client import Client, Currency
from inventory_pos.core.entities.lookup import ById, ByName, Lookup
from inventory_pos.core.entities.party import Party, PartyKind
from inventory_pos.core.entities.product import (
    MeasureUnitType,
    Product,
    ProductStock,
    ProductType,
    Status,
    StockType,
)
from inventory_pos.core.entities.transaction import (
    DocumentType,
    StockTransaction,
    StockTransactionItem,
    TransactionKind,
)
from inventory_pos.core.entities.variant import Variant, VariantOption

__all__ = [
    # Adjustment
    "AdjustmentType",
    "InventoryAdjustment",
    # Client
    "Client",
    "Currency",
    # Lookup
    "ById",
    "ByName",
    "Lookup",
    # Party
    "Party",
    "PartyKind",
    # Product
    "MeasureUnitType",
    "Product",
    "ProductStock",
    "ProductType",
    "Status",
    "StockType",
    # Transaction
    "DocumentType",
    "StockTransaction",
    "StockTransactionItem",
    "TransactionKind",
    # Variant
    "Variant",
    "VariantOption",
]
