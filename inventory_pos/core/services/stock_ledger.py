"""
Stock mutation ledger.

Single write path for on-hand SKU quantities: purchase and sale lines,
their reversals, and manual adjustments all go through ``apply_delta``.
"""

from enum import Enum

from inventory_pos.config import get_logger
from inventory_pos.core.entities.product import ProductStock
from inventory_pos.core.exceptions import (
    InsufficientStockError,
    ProductStockNotFoundError,
    ValidationError,
)
from inventory_pos.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


class StockDirection(str, Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"

    @property
    def reverse(self) -> "StockDirection":
        if self is StockDirection.INCREMENT:
            return StockDirection.DECREMENT
        return StockDirection.INCREMENT


class StockLedger:
    """
    Applies quantity deltas to SKUs.

    The store performs the change as one atomic SQL update, so concurrent
    writers never lose an increment. With ``allow_negative_stock`` off, a
    decrement below zero is refused and nothing is written.
    """

    def __init__(
        self,
        product_store: IProductStore,
        allow_negative_stock: bool = True,
    ) -> None:
        self._product_store = product_store
        self._allow_negative_stock = allow_negative_stock

    async def apply_delta(
        self,
        stock_id: int,
        quantity: float,
        direction: StockDirection,
    ) -> ProductStock:
        if quantity < 0:
            raise ValidationError(
                field="quantity",
                message="quantity must not be negative",
                value=quantity,
            )

        delta = quantity if direction is StockDirection.INCREMENT else -quantity
        allow_negative = self._allow_negative_stock or delta >= 0

        stock = await self._product_store.apply_stock_delta(
            stock_id, delta, allow_negative=allow_negative
        )
        if stock is None:
            await self._raise_for_missing_update(stock_id, quantity)

        logger.info(
            "stock_quantity_updated",
            stock_id=stock_id,
            direction=direction.value,
            quantity=quantity,
            new_quantity=stock.quantity,  # type: ignore[union-attr]
        )
        return stock  # type: ignore[return-value]

    async def _raise_for_missing_update(self, stock_id: int, quantity: float) -> None:
        current = await self._product_store.get_stock_quantity(stock_id)
        if current is None:
            raise ProductStockNotFoundError([stock_id])
        logger.warning(
            "stock_decrement_refused",
            stock_id=stock_id,
            requested=quantity,
            available=current,
        )
        raise InsufficientStockError(stock_id, requested=quantity, available=current)
