"""SQLite storage implementations."""

from inventory_pos.infrastructure.storage.sqlite.client_store import (
    SQLiteClientStore,
    SQLitePartyStore,
)
from inventory_pos.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    unit_of_work,
)
from inventory_pos.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from inventory_pos.infrastructure.storage.sqlite.transaction_store import (
    SQLiteAdjustmentStore,
    SQLiteStockTransactionStore,
)
from inventory_pos.infrastructure.storage.sqlite.variant_store import SQLiteVariantStore

# Singleton instances
_client_store: SQLiteClientStore | None = None
_party_store: SQLitePartyStore | None = None
_variant_store: SQLiteVariantStore | None = None
_product_store: SQLiteProductStore | None = None
_transaction_store: SQLiteStockTransactionStore | None = None
_adjustment_store: SQLiteAdjustmentStore | None = None


async def get_client_store() -> SQLiteClientStore:
    """Get singleton client store instance."""
    global _client_store
    if _client_store is None:
        _client_store = SQLiteClientStore()
    return _client_store


async def get_party_store() -> SQLitePartyStore:
    """Get singleton party store instance."""
    global _party_store
    if _party_store is None:
        _party_store = SQLitePartyStore()
    return _party_store


async def get_variant_store() -> SQLiteVariantStore:
    """Get singleton variant store instance."""
    global _variant_store
    if _variant_store is None:
        _variant_store = SQLiteVariantStore()
    return _variant_store


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_transaction_store() -> SQLiteStockTransactionStore:
    """Get singleton stock transaction store instance."""
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = SQLiteStockTransactionStore()
    return _transaction_store


async def get_adjustment_store() -> SQLiteAdjustmentStore:
    """Get singleton adjustment store instance."""
    global _adjustment_store
    if _adjustment_store is None:
        _adjustment_store = SQLiteAdjustmentStore()
    return _adjustment_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "unit_of_work",
    # Stores
    "SQLiteClientStore",
    "SQLitePartyStore",
    "SQLiteVariantStore",
    "SQLiteProductStore",
    "SQLiteStockTransactionStore",
    "SQLiteAdjustmentStore",
    # Singleton getters
    "get_client_store",
    "get_party_store",
    "get_variant_store",
    "get_product_store",
    "get_transaction_store",
    "get_adjustment_store",
]
