"""Soft-delete purchases and sales, reversing their stock and cost effects."""

from inventory_pos.application.use_cases.stock_transaction import (
    StockTransactionResult,
    StockTransactionUseCase,
)
from inventory_pos.config import get_logger
from inventory_pos.core.entities.transaction import TransactionKind
from inventory_pos.core.exceptions import StockTransactionNotFoundError
from inventory_pos.core.services.cost_accountant import EntityAction
from inventory_pos.core.services.stock_ledger import StockDirection

logger = get_logger(__name__)


class DeleteStockTransactionUseCase(StockTransactionUseCase):
    """
    Deactivate a document and replay each line in reverse.

    Reversal uses the quantities, amounts and exchange context recorded on
    the document, so it is the exact inverse of creation. Deleting an
    already inactive document is a not-found.
    """

    async def execute(self, client_id: str, transaction_id: int) -> StockTransactionResult:
        logger.info(
            f"delete_{self.kind.value}_started",
            client_id=client_id,
            transaction_id=transaction_id,
        )
        client = await self._get_client(client_id)
        store = await self._get_transaction_store()

        async with self._unit_of_work():
            transaction = await store.get_transaction(transaction_id, client_id, self.kind)
            if transaction is None:
                raise StockTransactionNotFoundError(self.kind.value, transaction_id)

            await store.deactivate_transaction(transaction_id)

            for item in transaction.items:
                await self._apply_line(
                    transaction, item, client.main_currency, EntityAction.DELETE
                )

        transaction.is_active = False
        for item in transaction.items:
            item.is_active = False

        logger.info(
            f"{self.kind.value}_deleted",
            transaction_id=transaction_id,
            items=len(transaction.items),
        )
        return StockTransactionResult(transaction=transaction)


class DeletePurchaseUseCase(DeleteStockTransactionUseCase):
    kind = TransactionKind.PURCHASE
    create_direction = StockDirection.INCREMENT


class DeleteSaleUseCase(DeleteStockTransactionUseCase):
    kind = TransactionKind.SALE
    create_direction = StockDirection.DECREMENT
