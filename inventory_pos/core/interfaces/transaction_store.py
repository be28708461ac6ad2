"""Abstract interfaces for stock transaction and adjustment storage."""

from abc import ABC, abstractmethod

from inventory_pos.core.entities.adjustment import AdjustmentType, InventoryAdjustment
from inventory_pos.core.entities.transaction import (
    StockTransaction,
    StockTransactionItem,
    TransactionKind,
)


class IStockTransactionStore(ABC):
    """Interface for purchase and sale documents."""

    @abstractmethod
    async def create_transaction(self, transaction: StockTransaction) -> StockTransaction:
        """Insert the document header only."""
        pass

    @abstractmethod
    async def add_item(self, item: StockTransactionItem) -> StockTransactionItem:
        pass

    @abstractmethod
    async def get_transaction(
        self,
        transaction_id: int,
        client_id: str,
        kind: TransactionKind,
        include_inactive: bool = False,
    ) -> StockTransaction | None:
        """Get a document with its items."""
        pass

    @abstractmethod
    async def list_transactions(
        self,
        client_id: str,
        kind: TransactionKind,
        include_inactive: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[StockTransaction]:
        """List documents (with items), newest first."""
        pass

    @abstractmethod
    async def deactivate_transaction(self, transaction_id: int) -> None:
        """Flag the header and all its items inactive."""
        pass


class IAdjustmentStore(ABC):
    """Interface for manual inventory adjustments."""

    @abstractmethod
    async def add_adjustment(
        self, adjustment: InventoryAdjustment
    ) -> InventoryAdjustment:
        pass

    @abstractmethod
    async def list_adjustments(
        self,
        client_id: str,
        adjustment_type: AdjustmentType | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryAdjustment]:
        pass
