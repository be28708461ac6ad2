"""Create Sale Use Case: stock out at the product's current price."""

from inventory_pos.application.dto.requests import CreateSaleRequest, SaleItemRequest
from inventory_pos.application.use_cases.stock_transaction import (
    CreateStockTransactionUseCase,
    ResolvedStock,
)
from inventory_pos.core.entities.transaction import StockTransactionItem, TransactionKind
from inventory_pos.core.services.stock_ledger import StockDirection


class CreateSaleUseCase(CreateStockTransactionUseCase):
    """Record a sale to a customer.

    Lines are priced at ``product.price``; a client-sent amount is ignored.
    The cost basis is never touched.
    """

    kind = TransactionKind.SALE
    create_direction = StockDirection.DECREMENT

    def _party_id(self, request: CreateSaleRequest) -> int:
        return request.customer_id

    def _line_requests(self, request: CreateSaleRequest) -> list[SaleItemRequest]:
        return request.sale_items

    def _build_item(
        self, line: SaleItemRequest, resolved: ResolvedStock
    ) -> StockTransactionItem:
        return StockTransactionItem(
            product_stock_id=line.product_stock_id,
            product_id=resolved.product.id,
            quantity=line.quantity,
            amount=resolved.product.price,
        )
