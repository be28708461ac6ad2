"""Shared plumbing for use cases: lazy stores, tenant lookup, unit of work."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from inventory_pos.config import get_settings
from inventory_pos.config.settings import InventorySettings
from inventory_pos.core.entities.client import Client
from inventory_pos.core.exceptions import ClientNotFoundError
from inventory_pos.core.interfaces.client_store import IClientStore
from inventory_pos.core.interfaces.product_store import IProductStore
from inventory_pos.core.services.cost_accountant import CostAccountant
from inventory_pos.core.services.stock_ledger import StockLedger

TransactionFactory = Callable[[], AbstractAsyncContextManager[Any]]


class UseCase:
    """
    Base for write use cases.

    Stores are optional constructor arguments; missing ones are fetched from
    the SQLite singletons on first use. ``transaction_factory`` returns the
    async context manager every multi-write operation runs in (the SQLite
    unit of work by default).
    """

    def __init__(
        self,
        client_store: IClientStore | None = None,
        product_store: IProductStore | None = None,
        transaction_factory: TransactionFactory | None = None,
        inventory_settings: InventorySettings | None = None,
    ):
        self._client_store = client_store
        self._product_store = product_store
        self._transaction_factory = transaction_factory
        self._inventory_settings = inventory_settings

    async def _get_client_store(self) -> IClientStore:
        if self._client_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_client_store

            self._client_store = await get_client_store()
        return self._client_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    @property
    def inventory_settings(self) -> InventorySettings:
        if self._inventory_settings is None:
            self._inventory_settings = get_settings().inventory
        return self._inventory_settings

    def _unit_of_work(self) -> AbstractAsyncContextManager[Any]:
        if self._transaction_factory is None:
            from inventory_pos.infrastructure.storage.sqlite import unit_of_work

            self._transaction_factory = unit_of_work
        return self._transaction_factory()

    async def _get_client(self, client_id: str) -> Client:
        """Active tenant or ClientNotFoundError."""
        store = await self._get_client_store()
        client = await store.get_client(client_id)
        if client is None or not client.is_active:
            raise ClientNotFoundError(client_id)
        return client

    async def _get_ledger(self) -> StockLedger:
        return StockLedger(
            await self._get_product_store(),
            allow_negative_stock=self.inventory_settings.allow_negative_stock,
        )

    async def _get_accountant(self) -> CostAccountant:
        return CostAccountant(
            await self._get_product_store(),
            depleted_policy=self.inventory_settings.depleted_average_cost,
            max_retries=self.inventory_settings.cost_update_retries,
        )
