"""Create Purchase Use Case: stock in, moving-average cost update."""

from inventory_pos.application.dto.requests import CreatePurchaseRequest, PurchaseItemRequest
from inventory_pos.application.use_cases.stock_transaction import (
    CreateStockTransactionUseCase,
    ResolvedStock,
)
from inventory_pos.core.entities.transaction import StockTransactionItem, TransactionKind
from inventory_pos.core.services.stock_ledger import StockDirection


class CreatePurchaseUseCase(CreateStockTransactionUseCase):
    """Record a purchase from a supplier.

    Each line increments its SKU and folds its unit cost, converted to the
    tenant's main currency, into the product's average cost.
    """

    kind = TransactionKind.PURCHASE
    create_direction = StockDirection.INCREMENT

    def _party_id(self, request: CreatePurchaseRequest) -> int:
        return request.supplier_id

    def _line_requests(self, request: CreatePurchaseRequest) -> list[PurchaseItemRequest]:
        return request.purchase_items

    def _build_item(
        self, line: PurchaseItemRequest, resolved: ResolvedStock
    ) -> StockTransactionItem:
        return StockTransactionItem(
            product_stock_id=line.product_stock_id,
            product_id=resolved.product.id,
            quantity=line.quantity,
            amount=line.amount,
            update_product_base_cost=line.update_product_base_cost,
        )
