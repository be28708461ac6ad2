"""Core interfaces (ports) for dependency injection."""

from inventory_pos.core.interfaces.client_store import IClientStore, IPartyStore
from inventory_pos.core.interfaces.product_store import IProductStore
from inventory_pos.core.interfaces.transaction_store import (
    IAdjustmentStore,
    IStockTransactionStore,
)
from inventory_pos.core.interfaces.variant_store import IVariantStore

__all__ = [
    "IClientStore",
    "IPartyStore",
    "IVariantStore",
    "IProductStore",
    "IStockTransactionStore",
    "IAdjustmentStore",
]
