"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from inventory_pos.config.settings import InventorySettings
from inventory_pos.core.entities.client import Client, Currency
from inventory_pos.core.entities.product import (
    Product,
    ProductStock,
    ProductType,
    StockType,
)
from inventory_pos.core.entities.transaction import (
    StockTransaction,
    StockTransactionItem,
    TransactionKind,
)
from inventory_pos.core.entities.variant import Variant, VariantOption


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def migrated_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """
    Temporary database migrated with the real migrator.

    The global pool points at it for the duration of the test.
    """
    import inventory_pos.infrastructure.storage.sqlite.connection as conn_module
    from inventory_pos.infrastructure.storage.sqlite.migrations.migrator import (
        initialize_database,
    )

    results = await initialize_database(temp_db_path)
    assert all(r.success for r in results)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()


@pytest.fixture
def inventory_settings() -> InventorySettings:
    return InventorySettings(
        allow_negative_stock=True,
        depleted_average_cost="base_cost",
        cost_update_retries=3,
        money_decimals=2,
    )


@pytest.fixture
def usd_client() -> Client:
    return Client(id="tenant-usd", name="Shop", main_currency=Currency.USD)


@pytest.fixture
def size_variant() -> Variant:
    return Variant(
        id=1,
        client_id="tenant-usd",
        name="Size",
        options=[
            VariantOption(id=1, variant_id=1, name="S"),
            VariantOption(id=2, variant_id=1, name="M"),
        ],
    )


@pytest.fixture
def color_variant() -> Variant:
    return Variant(
        id=2,
        client_id="tenant-usd",
        name="Color",
        options=[
            VariantOption(id=3, variant_id=2, name="Red"),
            VariantOption(id=4, variant_id=2, name="Blue"),
        ],
    )


@pytest.fixture
def product() -> Product:
    """Unique product with 10 units at an average of 5.00."""
    return Product(
        id=1,
        client_id="tenant-usd",
        type=ProductType.UNIQUE,
        name="Notebook",
        base_cost=5.0,
        average_cost=5.0,
        total_for_average_cost=10.0,
        price=9.0,
        version=3,
        stocks=[
            ProductStock(
                id=11,
                product_id=1,
                type=StockType.UNIQUE,
                initial_quantity=10,
                quantity=10,
                cost=5.0,
            )
        ],
    )


@pytest.fixture
def make_purchase():
    """Factory for purchase headers of the USD tenant."""

    def _make(
        currency: Currency = Currency.USD,
        exchange_from: Currency = Currency.USD,
        exchange_to: Currency = Currency.USD,
        rate: float = 1.0,
        items: list[StockTransactionItem] | None = None,
    ) -> StockTransaction:
        return StockTransaction(
            id=100,
            client_id="tenant-usd",
            kind=TransactionKind.PURCHASE,
            party_id=7,
            document_date=date(2024, 3, 1),
            currency=currency,
            currency_exchange_from=exchange_from,
            currency_exchange_to=exchange_to,
            exchange_rate=rate,
            items=items or [],
        )

    return _make


@pytest.fixture
def make_item():
    """Factory for transaction lines on SKU 11 of product 1."""

    def _make(
        quantity: float = 5,
        amount: float = 8.0,
        update_base_cost: bool = False,
        stock_id: int = 11,
        product_id: int = 1,
    ) -> StockTransactionItem:
        return StockTransactionItem(
            id=1,
            transaction_id=100,
            product_stock_id=stock_id,
            product_id=product_id,
            quantity=quantity,
            amount=amount,
            update_product_base_cost=update_base_cost,
        )

    return _make


class UnitOfWorkTracker:
    """Transaction factory that records whether a unit of work is open."""

    def __init__(self):
        self.active = False
        self.opened = 0

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[None]:
        self.active = True
        self.opened += 1
        try:
            yield
        finally:
            self.active = False


@pytest.fixture
def unit_of_work_tracker() -> UnitOfWorkTracker:
    return UnitOfWorkTracker()
