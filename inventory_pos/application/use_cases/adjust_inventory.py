"""Adjust Inventory Use Case: manual quantity corrections."""

from dataclasses import dataclass

from inventory_pos.application.dto.requests import CreateInventoryAdjustmentRequest
from inventory_pos.application.dto.responses import (
    AdjustInventoryResponse,
    InventoryAdjustmentResponse,
    ProductStockResponse,
)
from inventory_pos.application.use_cases.base import TransactionFactory, UseCase
from inventory_pos.config import get_logger
from inventory_pos.config.settings import InventorySettings
from inventory_pos.core.entities.adjustment import AdjustmentType, InventoryAdjustment
from inventory_pos.core.entities.product import ProductStock
from inventory_pos.core.exceptions import ProductStockNotFoundError
from inventory_pos.core.interfaces.client_store import IClientStore
from inventory_pos.core.interfaces.product_store import IProductStore
from inventory_pos.core.interfaces.transaction_store import IAdjustmentStore
from inventory_pos.core.services.stock_ledger import StockDirection

logger = get_logger(__name__)


@dataclass
class AdjustInventoryResult:
    """Result of a manual adjustment."""

    adjustment: InventoryAdjustment
    stock: ProductStock


class AdjustInventoryUseCase(UseCase):
    """Correct a SKU's on-hand quantity.

    Only the quantity moves; the product's cost basis is untouched.
    """

    def __init__(
        self,
        client_store: IClientStore | None = None,
        product_store: IProductStore | None = None,
        adjustment_store: IAdjustmentStore | None = None,
        transaction_factory: TransactionFactory | None = None,
        inventory_settings: InventorySettings | None = None,
    ):
        super().__init__(
            client_store=client_store,
            product_store=product_store,
            transaction_factory=transaction_factory,
            inventory_settings=inventory_settings,
        )
        self._adjustment_store = adjustment_store

    async def _get_adjustment_store(self) -> IAdjustmentStore:
        if self._adjustment_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_adjustment_store

            self._adjustment_store = await get_adjustment_store()
        return self._adjustment_store

    async def execute(
        self, client_id: str, request: CreateInventoryAdjustmentRequest
    ) -> AdjustInventoryResult:
        logger.info(
            "adjust_inventory_started",
            client_id=client_id,
            stock_id=request.product_stock_id,
            adjustment_type=request.adjustment_type.value,
            quantity=request.quantity,
        )
        await self._get_client(client_id)

        product_store = await self._get_product_store()
        if await product_store.get_stock(request.product_stock_id, client_id) is None:
            raise ProductStockNotFoundError([request.product_stock_id])

        direction = (
            StockDirection.INCREMENT
            if request.adjustment_type is AdjustmentType.INCREMENT
            else StockDirection.DECREMENT
        )
        adjustment = InventoryAdjustment(
            client_id=client_id,
            product_stock_id=request.product_stock_id,
            adjustment_type=request.adjustment_type,
            quantity=request.quantity,
            comment=request.comment,
            metadata=request.metadata,
        )

        ledger = await self._get_ledger()
        adjustment_store = await self._get_adjustment_store()
        async with self._unit_of_work():
            stock = await ledger.apply_delta(request.product_stock_id, request.quantity, direction)
            adjustment = await adjustment_store.add_adjustment(adjustment)

        return AdjustInventoryResult(adjustment=adjustment, stock=stock)

    def to_response(self, result: AdjustInventoryResult) -> AdjustInventoryResponse:
        """Convert result to API response."""
        return AdjustInventoryResponse(
            adjustment=InventoryAdjustmentResponse.model_validate(
                result.adjustment, from_attributes=True
            ),
            stock=ProductStockResponse.model_validate(result.stock, from_attributes=True),
        )
