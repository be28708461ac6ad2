"""
Stock transaction orchestration shared by purchases and sales.

A document is created or reversed in one unit of work: header, then each
line in order, each line followed by its ledger update and (purchases only)
its cost update. Any failure rolls the whole document back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any

from inventory_pos.application.dto.requests import StockTransactionRequest
from inventory_pos.application.dto.responses import StockTransactionResponse
from inventory_pos.application.use_cases.base import TransactionFactory, UseCase
from inventory_pos.config import get_logger
from inventory_pos.config.settings import InventorySettings
from inventory_pos.core.entities.client import Currency
from inventory_pos.core.entities.lookup import ById
from inventory_pos.core.entities.product import Product, ProductStock, Status
from inventory_pos.core.entities.transaction import (
    StockTransaction,
    StockTransactionItem,
    TransactionKind,
)
from inventory_pos.core.exceptions import (
    PartyNotFoundError,
    ProductNotFoundError,
    ProductStockNotFoundError,
    ValidationError,
)
from inventory_pos.core.interfaces.client_store import IClientStore, IPartyStore
from inventory_pos.core.interfaces.product_store import IProductStore
from inventory_pos.core.interfaces.transaction_store import IStockTransactionStore
from inventory_pos.core.services.cost_accountant import EntityAction
from inventory_pos.core.services.currency import round_money, validate_currency_exchange
from inventory_pos.core.services.stock_ledger import StockDirection

logger = get_logger(__name__)


@dataclass
class StockTransactionResult:
    """A purchase or sale after create or delete."""

    transaction: StockTransaction


@dataclass
class ResolvedStock:
    """A SKU with its product, both checked against the tenant."""

    stock: ProductStock
    product: Product


class StockTransactionUseCase(UseCase):
    """
    Base for purchase and sale use cases.

    Subclasses set ``kind`` and ``create_direction``. Reversal uses the
    opposite direction, and only purchases move the cost basis.
    """

    kind: TransactionKind
    create_direction: StockDirection

    def __init__(
        self,
        client_store: IClientStore | None = None,
        party_store: IPartyStore | None = None,
        product_store: IProductStore | None = None,
        transaction_store: IStockTransactionStore | None = None,
        transaction_factory: TransactionFactory | None = None,
        inventory_settings: InventorySettings | None = None,
    ):
        super().__init__(
            client_store=client_store,
            product_store=product_store,
            transaction_factory=transaction_factory,
            inventory_settings=inventory_settings,
        )
        self._party_store = party_store
        self._transaction_store = transaction_store

    async def _get_party_store(self) -> IPartyStore:
        if self._party_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_party_store

            self._party_store = await get_party_store()
        return self._party_store

    async def _get_transaction_store(self) -> IStockTransactionStore:
        if self._transaction_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_transaction_store

            self._transaction_store = await get_transaction_store()
        return self._transaction_store

    async def _apply_line(
        self,
        transaction: StockTransaction,
        item: StockTransactionItem,
        main_currency: Currency,
        action: EntityAction,
    ) -> None:
        """Ledger update, then cost update for purchases."""
        direction = (
            self.create_direction
            if action is EntityAction.CREATE
            else self.create_direction.reverse
        )
        ledger = await self._get_ledger()
        await ledger.apply_delta(item.product_stock_id, item.quantity, direction)

        if self.kind is TransactionKind.PURCHASE:
            accountant = await self._get_accountant()
            await accountant.apply_purchase_line(
                item.product_id, transaction, item, main_currency, action
            )

    def to_response(self, result: StockTransactionResult) -> StockTransactionResponse:
        """Convert result to API response."""
        return StockTransactionResponse.model_validate(result.transaction, from_attributes=True)


class CreateStockTransactionUseCase(StockTransactionUseCase, ABC):
    """
    Create a purchase or a sale.

    Every check (exchange fields, party, SKUs) runs before the first write.
    Subclasses read their own request shape through ``_party_id``,
    ``_line_requests`` and ``_build_item``.
    """

    @abstractmethod
    def _party_id(self, request: Any) -> int:
        """Supplier or customer id of the request."""
        pass

    @abstractmethod
    def _line_requests(self, request: Any) -> list[Any]:
        """Request lines, in document order."""
        pass

    @abstractmethod
    def _build_item(self, line: Any, resolved: ResolvedStock) -> StockTransactionItem:
        """Build the stored line for a resolved SKU."""
        pass

    async def execute(
        self, client_id: str, request: StockTransactionRequest
    ) -> StockTransactionResult:
        lines = self._line_requests(request)
        logger.info(
            f"create_{self.kind.value}_started",
            client_id=client_id,
            items=len(lines),
        )

        # 1. Tenant and exchange context
        client = await self._get_client(client_id)
        exchange = validate_currency_exchange(
            request.currency,
            request.currency_exchange_from,
            request.currency_exchange_to,
            request.exchange_rate,
            client.main_currency,
        )

        # 2. Counterparty
        await self._check_party(self._party_id(request), client_id)

        # 3. SKUs
        resolved = await self._resolve_stocks(
            [line.product_stock_id for line in lines], client_id
        )

        # 4. Amounts and total
        items = [self._build_item(line, resolved[line.product_stock_id]) for line in lines]
        total = round_money(
            sum(item.line_total for item in items),
            self.inventory_settings.money_decimals,
        )

        transaction = StockTransaction(
            client_id=client_id,
            kind=self.kind,
            party_id=self._party_id(request),
            document_type=request.document_type,
            invoice_number=request.invoice_number,
            control_number=request.control_number,
            document_date=request.document_date or date.today(),
            currency=request.currency,
            currency_exchange_from=exchange.currency_exchange_from,
            currency_exchange_to=exchange.currency_exchange_to,
            exchange_rate=exchange.exchange_rate,
            total=total,
            comment=request.comment,
            metadata=request.metadata,
        )

        # 5. Persist and apply, all or nothing
        store = await self._get_transaction_store()
        async with self._unit_of_work():
            transaction = await store.create_transaction(transaction)
            for item in items:
                item.transaction_id = transaction.id
                await store.add_item(item)
                await self._apply_line(
                    transaction, item, client.main_currency, EntityAction.CREATE
                )

        transaction.items = items
        logger.info(
            f"{self.kind.value}_created",
            transaction_id=transaction.id,
            items=len(items),
            total=transaction.total,
            currency=transaction.currency.value,
        )
        return StockTransactionResult(transaction=transaction)

    async def _check_party(self, party_id: int, client_id: str) -> None:
        party_kind = self.kind.party_kind
        store = await self._get_party_store()
        if await store.get_party(party_id, client_id, party_kind) is None:
            raise PartyNotFoundError(party_kind.value, party_id)

    async def _resolve_stocks(
        self, stock_ids: list[int], client_id: str
    ) -> dict[int, ResolvedStock]:
        """
        Load every referenced SKU and its product for the tenant.

        Raises:
            ProductStockNotFoundError: some ids are unknown or belong to
                another tenant (all of them are counted).
            ValidationError: a SKU or its product is inactive.
        """
        product_store = await self._get_product_store()
        stocks = await product_store.get_stocks_by_ids(stock_ids, client_id)
        found: dict[int, ProductStock] = {stock.id: stock for stock in stocks if stock.id}

        missing = [sid for sid in dict.fromkeys(stock_ids) if sid not in found]
        if missing:
            raise ProductStockNotFoundError(missing)

        products: dict[int, Product] = {}
        resolved: dict[int, ResolvedStock] = {}
        for stock_id, stock in found.items():
            product_id = int(stock.product_id or 0)
            if product_id not in products:
                product = await product_store.find_product(ById(product_id), client_id)
                if product is None:
                    raise ProductNotFoundError(product_id)
                products[product_id] = product
            product = products[product_id]

            if stock.status is not Status.ACTIVE or product.status is not Status.ACTIVE:
                raise ValidationError(
                    field="product_stock_id",
                    message=(
                        f"ProductStock '{stock_id}' is inactive and is excluded "
                        "from new transactions"
                    ),
                    value=stock_id,
                )
            resolved[stock_id] = ResolvedStock(stock=stock, product=product)
        return resolved
