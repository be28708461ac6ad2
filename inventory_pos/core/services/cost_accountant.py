"""
Moving-average cost accountant.

Keeps a product's ``average_cost`` / ``total_for_average_cost`` /
``base_cost`` in step with purchase lines. Sales never come through here.

The cumulative cost basis is not stored; it is rebuilt on every call as
``total_for_average_cost * average_cost``. Rounding to 2 decimals happens
only on the values written back.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
)

from inventory_pos.config import get_logger
from inventory_pos.core.entities.client import Currency
from inventory_pos.core.entities.lookup import ById
from inventory_pos.core.entities.product import Product
from inventory_pos.core.entities.transaction import StockTransaction, StockTransactionItem
from inventory_pos.core.exceptions import ConcurrentUpdateError, ProductNotFoundError
from inventory_pos.core.interfaces.product_store import IProductStore
from inventory_pos.core.services.currency import amount_in_main_currency, round_money

logger = get_logger(__name__)

DepletedPolicy = Literal["base_cost", "zero"]


class EntityAction(str, Enum):
    CREATE = "create"
    DELETE = "delete"


@dataclass
class CostUpdate:
    """New cost triad for a product, ready to persist."""

    base_cost: float
    average_cost: float
    total_for_average_cost: float
    converted_cost: float  # unit cost of the line in main currency, unrounded


def compute_cost_update(
    product: Product,
    transaction: StockTransaction,
    item: StockTransactionItem,
    main_currency: Currency,
    action: EntityAction,
    depleted_policy: DepletedPolicy = "base_cost",
) -> CostUpdate:
    """
    Apply one purchase line (or its reversal) to a product's cost basis.

    Worked example: ``{total: 10, average: 5.00}`` plus ``5 @ 8.00`` gives
    ``total = 15`` and ``average = (50 + 40) / 15 = 6.00``.

    When the new total is zero or less the average is undefined; it becomes
    the base cost (``"base_cost"``) or ``0`` (``"zero"``).
    """
    converted = amount_in_main_currency(
        main_currency,
        transaction.currency,
        transaction.currency_exchange_from,
        transaction.exchange_rate,
        item.amount,
    )

    current_total_cost = product.cost_basis
    line_cost = item.quantity * converted

    if action is EntityAction.CREATE:
        new_total = product.total_for_average_cost + item.quantity
        new_total_cost = current_total_cost + line_cost
    else:
        new_total = product.total_for_average_cost - item.quantity
        new_total_cost = current_total_cost - line_cost

    base_cost = product.base_cost
    if item.update_product_base_cost:
        base_cost = round_money(converted)

    if new_total > 0:
        new_average = round_money(new_total_cost / new_total)
    elif depleted_policy == "zero":
        new_average = 0.0
    else:
        new_average = base_cost

    return CostUpdate(
        base_cost=base_cost,
        average_cost=new_average,
        total_for_average_cost=new_total,
        converted_cost=converted,
    )


class VersionConflict(Exception):
    """Another writer bumped the product version first."""

    def __init__(self, product_id: int, expected_version: int):
        super().__init__(f"Product {product_id} is no longer at version {expected_version}")
        self.product_id = product_id
        self.expected_version = expected_version


class CostAccountant:
    """
    Persists cost updates with optimistic concurrency.

    Each write is conditioned on the product ``version`` read just before;
    when another writer got there first the product is reloaded and the
    update recomputed, up to ``max_retries`` extra attempts.
    """

    def __init__(
        self,
        product_store: IProductStore,
        depleted_policy: DepletedPolicy = "base_cost",
        max_retries: int = 3,
    ) -> None:
        self._product_store = product_store
        self._depleted_policy = depleted_policy
        self._max_retries = max_retries

    def _get_retry_decorator(self) -> Any:
        """Retry only on version conflicts, with no delay between attempts."""
        return retry(
            stop=stop_after_attempt(self._max_retries + 1),
            retry=retry_if_exception_type(VersionConflict),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "average_cost_update_retry",
            attempt=retry_state.attempt_number,
            product_id=getattr(error, "product_id", None),
            expected_version=getattr(error, "expected_version", None),
        )

    async def apply_purchase_line(
        self,
        product_id: int,
        transaction: StockTransaction,
        item: StockTransactionItem,
        main_currency: Currency,
        action: EntityAction,
    ) -> Product:
        apply_once = self._get_retry_decorator()(self._apply_once)
        try:
            updated = await apply_once(product_id, transaction, item, main_currency, action)
        except VersionConflict as e:
            attempts = self._max_retries + 1
            logger.error("average_cost_update_conflict", product_id=product_id, attempts=attempts)
            raise ConcurrentUpdateError("Product", product_id, attempts) from e

        logger.info(
            "average_cost_updated",
            product_id=product_id,
            action=action.value,
            average_cost=updated.average_cost,
            total_for_average_cost=updated.total_for_average_cost,
            base_cost=updated.base_cost,
        )
        return updated

    async def _apply_once(
        self,
        product_id: int,
        transaction: StockTransaction,
        item: StockTransactionItem,
        main_currency: Currency,
        action: EntityAction,
    ) -> Product:
        product = await self._product_store.find_product(ById(product_id), transaction.client_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        update = compute_cost_update(
            product,
            transaction,
            item,
            main_currency,
            action,
            depleted_policy=self._depleted_policy,
        )
        updated = await self._product_store.update_cost_fields(
            product_id,
            expected_version=product.version,
            base_cost=update.base_cost,
            average_cost=update.average_cost,
            total_for_average_cost=update.total_for_average_cost,
        )
        if updated is None:
            raise VersionConflict(product_id, product.version)
        return updated
