"""Tests for purchase and sale create/delete use cases."""

from contextlib import nullcontext
from unittest.mock import AsyncMock

import pytest

from inventory_pos.application.dto.requests import CreatePurchaseRequest, CreateSaleRequest
from inventory_pos.application.use_cases.create_purchase import CreatePurchaseUseCase
from inventory_pos.application.use_cases.create_sale import CreateSaleUseCase
from inventory_pos.application.use_cases.delete_stock_transaction import (
    DeletePurchaseUseCase,
    DeleteSaleUseCase,
)
from inventory_pos.application.use_cases.stock_transaction import CreateStockTransactionUseCase
from inventory_pos.core.entities.client import Currency
from inventory_pos.core.entities.party import Party, PartyKind
from inventory_pos.core.entities.product import ProductStock, Status
from inventory_pos.core.entities.transaction import TransactionKind
from inventory_pos.core.exceptions import (
    ClientNotFoundError,
    PartyNotFoundError,
    ProductStockNotFoundError,
    StockTransactionNotFoundError,
    ValidationError,
)


def _stock(stock_id: int, quantity: float = 10, status: Status = Status.ACTIVE) -> ProductStock:
    return ProductStock(id=stock_id, product_id=1, quantity=quantity, status=status)


@pytest.fixture
def client_store(usd_client):
    store = AsyncMock()
    store.get_client.return_value = usd_client
    return store


@pytest.fixture
def party_store():
    store = AsyncMock()
    store.get_party.return_value = Party(
        id=7, client_id="tenant-usd", kind=PartyKind.SUPPLIER, name="Acme"
    )
    return store


@pytest.fixture
def product_store(product):
    store = AsyncMock()
    store.get_stocks_by_ids.return_value = [_stock(11), _stock(12)]
    store.find_product.return_value = product
    store.apply_stock_delta.return_value = _stock(11)
    store.update_cost_fields.return_value = product
    return store


@pytest.fixture
def transaction_store():
    store = AsyncMock()

    async def create_transaction(transaction):
        transaction.id = 100
        return transaction

    store.create_transaction.side_effect = create_transaction
    store.add_item.side_effect = lambda item: item
    return store


@pytest.fixture
def use_case_kwargs(client_store, party_store, product_store, transaction_store, inventory_settings):
    return {
        "client_store": client_store,
        "party_store": party_store,
        "product_store": product_store,
        "transaction_store": transaction_store,
        "transaction_factory": nullcontext,
        "inventory_settings": inventory_settings,
    }


def purchase_request(**overrides) -> CreatePurchaseRequest:
    data = {
        "supplier_id": 7,
        "currency": "USD",
        "purchase_items": [
            {"product_stock_id": 11, "quantity": 3, "amount": 10.0},
            {"product_stock_id": 12, "quantity": 2, "amount": 7.5},
        ],
    }
    data.update(overrides)
    return CreatePurchaseRequest.model_validate(data)


def sale_request(**overrides) -> CreateSaleRequest:
    data = {
        "customer_id": 7,
        "currency": "USD",
        "sale_items": [{"product_stock_id": 11, "quantity": 4, "amount": 1.0}],
    }
    data.update(overrides)
    return CreateSaleRequest.model_validate(data)


class TestCreateStockTransactionBase:
    def test_is_abstract(self):
        with pytest.raises(TypeError, match="abstract"):
            CreateStockTransactionUseCase()


class TestCreatePurchase:
    """Tests for CreatePurchaseUseCase."""

    async def test_total_is_sum_of_lines(self, use_case_kwargs):
        result = await CreatePurchaseUseCase(**use_case_kwargs).execute(
            "tenant-usd", purchase_request()
        )
        assert result.transaction.total == 45.00
        assert result.transaction.id == 100
        assert [item.transaction_id for item in result.transaction.items] == [100, 100]

    async def test_same_currency_normalizes_exchange(self, use_case_kwargs):
        request = purchase_request(
            currency_exchange_from="EUR", currency_exchange_to="VES", exchange_rate=3.0
        )
        result = await CreatePurchaseUseCase(**use_case_kwargs).execute("tenant-usd", request)
        assert result.transaction.currency_exchange_from == Currency.USD
        assert result.transaction.currency_exchange_to == Currency.USD
        assert result.transaction.exchange_rate == 1.0

    async def test_increments_and_updates_cost_per_line(self, use_case_kwargs, product_store):
        await CreatePurchaseUseCase(**use_case_kwargs).execute("tenant-usd", purchase_request())

        deltas = [call.args[:2] for call in product_store.apply_stock_delta.await_args_list]
        assert deltas == [(11, 3), (12, 2)]
        assert product_store.update_cost_fields.await_count == 2

    async def test_missing_party(self, use_case_kwargs, party_store, transaction_store):
        party_store.get_party.return_value = None

        with pytest.raises(PartyNotFoundError, match="Supplier"):
            await CreatePurchaseUseCase(**use_case_kwargs).execute(
                "tenant-usd", purchase_request()
            )
        transaction_store.create_transaction.assert_not_awaited()

    async def test_missing_stocks_are_counted(self, use_case_kwargs, product_store):
        product_store.get_stocks_by_ids.return_value = []

        with pytest.raises(ProductStockNotFoundError) as exc_info:
            await CreatePurchaseUseCase(**use_case_kwargs).execute(
                "tenant-usd", purchase_request()
            )
        assert exc_info.value.details["stock_ids"] == [11, 12]

    async def test_inactive_stock_refused(self, use_case_kwargs, product_store, transaction_store):
        product_store.get_stocks_by_ids.return_value = [
            _stock(11),
            _stock(12, status=Status.INACTIVE),
        ]

        with pytest.raises(ValidationError, match="inactive"):
            await CreatePurchaseUseCase(**use_case_kwargs).execute(
                "tenant-usd", purchase_request()
            )
        transaction_store.create_transaction.assert_not_awaited()

    async def test_foreign_currency_requires_exchange(self, use_case_kwargs):
        with pytest.raises(ValidationError):
            await CreatePurchaseUseCase(**use_case_kwargs).execute(
                "tenant-usd", purchase_request(currency="EUR")
            )

    async def test_unknown_client(self, use_case_kwargs, client_store):
        client_store.get_client.return_value = None

        with pytest.raises(ClientNotFoundError):
            await CreatePurchaseUseCase(**use_case_kwargs).execute("nobody", purchase_request())

    def test_to_response(self, use_case_kwargs, make_purchase, make_item):
        from inventory_pos.application.use_cases.stock_transaction import StockTransactionResult

        use_case = CreatePurchaseUseCase(**use_case_kwargs)
        response = use_case.to_response(
            StockTransactionResult(transaction=make_purchase(items=[make_item()]))
        )
        assert response.id == 100
        assert response.kind == TransactionKind.PURCHASE
        assert response.items[0].product_stock_id == 11


class TestCreateSale:
    """Tests for CreateSaleUseCase."""

    async def test_price_overrides_sent_amount(self, use_case_kwargs, product):
        result = await CreateSaleUseCase(**use_case_kwargs).execute("tenant-usd", sale_request())

        item = result.transaction.items[0]
        assert item.amount == product.price
        assert result.transaction.total == 36.00

    async def test_decrements_without_touching_cost(self, use_case_kwargs, product_store):
        await CreateSaleUseCase(**use_case_kwargs).execute("tenant-usd", sale_request())

        product_store.apply_stock_delta.assert_awaited_once_with(11, -4, allow_negative=True)
        product_store.update_cost_fields.assert_not_awaited()

    async def test_checks_customer_kind(self, use_case_kwargs, party_store):
        await CreateSaleUseCase(**use_case_kwargs).execute("tenant-usd", sale_request())

        party_store.get_party.assert_awaited_once_with(7, "tenant-usd", PartyKind.CUSTOMER)


class TestDeleteStockTransaction:
    """Tests for purchase and sale reversal."""

    async def test_purchase_reversal(
        self, use_case_kwargs, transaction_store, product_store, make_purchase, make_item
    ):
        transaction_store.get_transaction.return_value = make_purchase(
            items=[make_item(5, 8.0)]
        )

        result = await DeletePurchaseUseCase(**use_case_kwargs).execute("tenant-usd", 100)

        transaction_store.deactivate_transaction.assert_awaited_once_with(100)
        product_store.apply_stock_delta.assert_awaited_once_with(11, -5, allow_negative=True)
        product_store.update_cost_fields.assert_awaited_once()
        assert result.transaction.is_active is False
        assert all(not item.is_active for item in result.transaction.items)

    async def test_sale_reversal_restocks(
        self, use_case_kwargs, transaction_store, product_store, make_purchase, make_item
    ):
        sale = make_purchase(items=[make_item(4, 9.0)])
        sale.kind = TransactionKind.SALE
        transaction_store.get_transaction.return_value = sale

        await DeleteSaleUseCase(**use_case_kwargs).execute("tenant-usd", 100)

        product_store.apply_stock_delta.assert_awaited_once_with(11, 4, allow_negative=True)
        product_store.update_cost_fields.assert_not_awaited()

    async def test_inactive_or_missing_is_not_found(self, use_case_kwargs, transaction_store):
        transaction_store.get_transaction.return_value = None

        with pytest.raises(StockTransactionNotFoundError, match="Purchase with id '100'"):
            await DeletePurchaseUseCase(**use_case_kwargs).execute("tenant-usd", 100)
        transaction_store.deactivate_transaction.assert_not_awaited()
