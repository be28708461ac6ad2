"""Tests for the SQLite store implementations against a migrated database."""

from datetime import date

import pytest

from inventory_pos.core.entities.adjustment import AdjustmentType, InventoryAdjustment
from inventory_pos.core.entities.client import Client, Currency
from inventory_pos.core.entities.lookup import ById, ByName
from inventory_pos.core.entities.party import Party, PartyKind
from inventory_pos.core.entities.product import (
    Product,
    ProductStock,
    ProductType,
    Status,
    StockType,
)
from inventory_pos.core.entities.transaction import (
    StockTransaction,
    StockTransactionItem,
    TransactionKind,
)
from inventory_pos.core.entities.variant import Variant, VariantOption
from inventory_pos.core.exceptions import DuplicateKeyError
from inventory_pos.infrastructure.storage.sqlite import (
    SQLiteAdjustmentStore,
    SQLiteClientStore,
    SQLitePartyStore,
    SQLiteProductStore,
    SQLiteStockTransactionStore,
    SQLiteVariantStore,
)


@pytest.fixture
async def tenants(migrated_db):
    store = SQLiteClientStore()
    await store.create_client(Client(id="t1", name="One", main_currency=Currency.USD))
    await store.create_client(Client(id="t2", name="Two", main_currency=Currency.EUR))
    return store


@pytest.fixture
async def stocked_product(tenants):
    """Unique product of tenant t1 with 10 units at 5.00."""
    store = SQLiteProductStore()
    product = await store.create_product(
        Product(
            client_id="t1",
            name="Notebook",
            base_cost=5.0,
            average_cost=5.0,
            total_for_average_cost=10,
            price=9.0,
        )
    )
    stock = await store.create_stock(
        ProductStock(product_id=product.id, initial_quantity=10, quantity=10, cost=5.0)
    )
    product.stocks = [stock]
    return product


class TestClientAndPartyStores:
    async def test_client_roundtrip(self, tenants):
        client = await tenants.get_client("t2")
        assert client.name == "Two"
        assert client.main_currency == Currency.EUR
        assert client.is_active
        assert await tenants.get_client("missing") is None

    async def test_party_names_unique_per_kind_ignoring_case(self, tenants):
        store = SQLitePartyStore()
        await store.create_party(Party(client_id="t1", kind=PartyKind.SUPPLIER, name="Acme"))
        await store.create_party(Party(client_id="t1", kind=PartyKind.CUSTOMER, name="Acme"))
        await store.create_party(Party(client_id="t2", kind=PartyKind.SUPPLIER, name="Acme"))

        with pytest.raises(DuplicateKeyError):
            await store.create_party(
                Party(client_id="t1", kind=PartyKind.SUPPLIER, name="ACME")
            )

    async def test_get_party_checks_tenant_and_kind(self, tenants):
        store = SQLitePartyStore()
        party = await store.create_party(
            Party(client_id="t1", kind=PartyKind.SUPPLIER, name="Acme")
        )

        assert await store.get_party(party.id, "t1", PartyKind.SUPPLIER) is not None
        assert await store.get_party(party.id, "t1", PartyKind.CUSTOMER) is None
        assert await store.get_party(party.id, "t2", PartyKind.SUPPLIER) is None
        found = await store.find_party_by_name("acme", "t1", PartyKind.SUPPLIER)
        assert found.id == party.id
        assert [p.id for p in await store.list_parties("t1", PartyKind.SUPPLIER)] == [party.id]


class TestProductStore:
    async def test_find_by_id_and_name(self, stocked_product):
        store = SQLiteProductStore()

        by_id = await store.find_product(ById(stocked_product.id), "t1")
        by_name = await store.find_product(ByName("NOTEBOOK"), "t1")

        assert by_id.id == by_name.id == stocked_product.id
        assert by_id.stocks[0].quantity == 10
        assert await store.find_product(ById(stocked_product.id), "t2") is None

    async def test_numeric_name_is_a_name(self, tenants):
        store = SQLiteProductStore()
        product = await store.create_product(Product(client_id="t1", name="1"))
        await store.create_product(Product(client_id="t1", name="Other"))

        found = await store.find_product(ByName("1"), "t1")
        assert found.id == product.id

    async def test_duplicate_name(self, stocked_product):
        with pytest.raises(DuplicateKeyError):
            await SQLiteProductStore().create_product(Product(client_id="t1", name="notebook"))

    async def test_stocks_are_tenant_scoped(self, stocked_product):
        store = SQLiteProductStore()
        stock_id = stocked_product.stocks[0].id

        assert [s.id for s in await store.get_stocks_by_ids([stock_id, 999], "t1")] == [stock_id]
        assert await store.get_stocks_by_ids([stock_id], "t2") == []
        assert await store.get_stock(stock_id, "t2") is None

    async def test_apply_stock_delta(self, stocked_product):
        store = SQLiteProductStore()
        stock_id = stocked_product.stocks[0].id

        stock = await store.apply_stock_delta(stock_id, -12)
        assert stock.quantity == -2

        assert await store.apply_stock_delta(stock_id, -1, allow_negative=False) is None
        assert await store.get_stock_quantity(stock_id) == -2
        assert await store.apply_stock_delta(999, 1) is None

    async def test_update_cost_fields_compare_and_swap(self, stocked_product):
        store = SQLiteProductStore()

        updated = await store.update_cost_fields(
            stocked_product.id,
            expected_version=0,
            base_cost=5.0,
            average_cost=6.0,
            total_for_average_cost=15,
        )
        assert updated.average_cost == 6.0
        assert updated.version == 1

        stale = await store.update_cost_fields(
            stocked_product.id,
            expected_version=0,
            base_cost=5.0,
            average_cost=7.0,
            total_for_average_cost=20,
        )
        assert stale is None

    async def test_update_product_keeps_cost_basis(self, stocked_product):
        store = SQLiteProductStore()
        stocked_product.price = 11.0
        stocked_product.average_cost = 99.0

        await store.update_product(stocked_product)

        reloaded = await store.find_product(ById(stocked_product.id), "t1")
        assert reloaded.price == 11.0
        assert reloaded.average_cost == 5.0
        assert reloaded.version == 1

    async def test_child_stock_combination_unique(self, tenants):
        store = SQLiteProductStore()
        product = await store.create_product(
            Product(client_id="t1", type=ProductType.PARENT, name="Shirt")
        )
        await store.create_stock(
            ProductStock(product_id=product.id, type=StockType.CHILD, option_combination=[2, 1])
        )

        with pytest.raises(DuplicateKeyError):
            await store.create_stock(
                ProductStock(
                    product_id=product.id, type=StockType.CHILD, option_combination=[1, 2]
                )
            )

    async def test_list_products_filters_status(self, stocked_product):
        store = SQLiteProductStore()
        await store.create_product(Product(client_id="t1", name="Old", status=Status.INACTIVE))

        active = await store.list_products("t1", status=Status.ACTIVE)
        everything = await store.list_products("t1")

        assert [p.name for p in active] == ["Notebook"]
        assert len(everything) == 2


class TestVariantStore:
    async def test_create_find_and_lock(self, tenants):
        store = SQLiteVariantStore()
        variant = await store.create_variant(
            Variant(
                client_id="t1",
                name="Size",
                options=[VariantOption(name="S"), VariantOption(name="M")],
            )
        )

        found = await store.find_variant(ByName("size"), "t1")
        assert [o.name for o in found.options] == ["S", "M"]
        assert found.can_edit

        await store.set_can_edit([variant.id], False)
        locked = await store.find_variant(ById(variant.id), "t1")
        assert locked.can_edit is False
        assert await store.list_variants("t2") == []

    async def test_option_operations(self, tenants):
        store = SQLiteVariantStore()
        variant = await store.create_variant(
            Variant(client_id="t1", name="Color", options=[VariantOption(name="Red")])
        )
        red = variant.options[0]

        blue = await store.add_option(VariantOption(variant_id=variant.id, name="Blue"))
        await store.rename_option(red.id, "Crimson")
        await store.delete_option(blue.id)

        found = await store.find_variant(ById(variant.id), "t1")
        assert [(o.id, o.name) for o in found.options] == [(red.id, "Crimson")]

        assert await store.delete_variant(variant.id) is True
        assert await store.find_variant(ById(variant.id), "t1") is None


class TestTransactionStores:
    async def test_create_get_and_deactivate(self, stocked_product):
        supplier = await SQLitePartyStore().create_party(
            Party(client_id="t1", kind=PartyKind.SUPPLIER, name="Acme")
        )
        store = SQLiteStockTransactionStore()
        transaction = await store.create_transaction(
            StockTransaction(
                client_id="t1",
                kind=TransactionKind.PURCHASE,
                party_id=supplier.id,
                document_date=date(2024, 3, 1),
                currency=Currency.USD,
                currency_exchange_from=Currency.USD,
                currency_exchange_to=Currency.USD,
                total=40.0,
            )
        )
        await store.add_item(
            StockTransactionItem(
                transaction_id=transaction.id,
                product_stock_id=stocked_product.stocks[0].id,
                product_id=stocked_product.id,
                quantity=5,
                amount=8.0,
            )
        )

        loaded = await store.get_transaction(transaction.id, "t1", TransactionKind.PURCHASE)
        assert loaded.document_date == date(2024, 3, 1)
        assert loaded.items[0].amount == 8.0
        assert await store.get_transaction(transaction.id, "t1", TransactionKind.SALE) is None
        assert await store.get_transaction(transaction.id, "t2", TransactionKind.PURCHASE) is None

        await store.deactivate_transaction(transaction.id)

        assert await store.get_transaction(transaction.id, "t1", TransactionKind.PURCHASE) is None
        inactive = await store.get_transaction(
            transaction.id, "t1", TransactionKind.PURCHASE, include_inactive=True
        )
        assert inactive.is_active is False
        assert inactive.items[0].is_active is False
        assert await store.list_transactions("t1", TransactionKind.PURCHASE) == []
        assert len(
            await store.list_transactions("t1", TransactionKind.PURCHASE, include_inactive=True)
        ) == 1

    async def test_adjustments(self, stocked_product):
        store = SQLiteAdjustmentStore()
        stock_id = stocked_product.stocks[0].id
        for adjustment_type in (AdjustmentType.INCREMENT, AdjustmentType.DECREMENT):
            await store.add_adjustment(
                InventoryAdjustment(
                    client_id="t1",
                    product_stock_id=stock_id,
                    adjustment_type=adjustment_type,
                    quantity=1,
                    comment="Yearly count",
                )
            )

        decrements = await store.list_adjustments("t1", AdjustmentType.DECREMENT)
        assert [a.adjustment_type for a in decrements] == [AdjustmentType.DECREMENT]
        assert len(await store.list_adjustments("t1")) == 2
        assert await store.list_adjustments("t2") == []
