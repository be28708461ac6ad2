"""Abstract interface for product and SKU storage."""

from abc import ABC, abstractmethod

from inventory_pos.core.entities.lookup import Lookup
from inventory_pos.core.entities.product import Product, ProductStock, Status


class IProductStore(ABC):
    """
    Interface for products and their stocks.

    Quantity and cost writes are the only concurrent hot spots, so they get
    dedicated conditional operations instead of a generic update.
    """

    # Product operations
    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a product row (stocks are created separately)."""
        pass

    @abstractmethod
    async def find_product(self, lookup: Lookup, client_id: str) -> Product | None:
        """Get a tenant's product with its stocks by id or by name."""
        pass

    @abstractmethod
    async def list_products(
        self,
        client_id: str,
        status: Status | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        """List the tenant's products."""
        pass

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Update descriptive fields, price, base cost and status."""
        pass

    @abstractmethod
    async def link_variants(self, product_id: int, variant_ids: list[int]) -> None:
        """Record which variants a parent product is built from."""
        pass

    @abstractmethod
    async def update_cost_fields(
        self,
        product_id: int,
        expected_version: int,
        base_cost: float,
        average_cost: float,
        total_for_average_cost: float,
    ) -> Product | None:
        """
        Write the cost triad if the product is still at ``expected_version``.

        Returns the updated product, or None when the version moved on.
        """
        pass

    # Stock operations
    @abstractmethod
    async def create_stock(self, stock: ProductStock) -> ProductStock:
        pass

    @abstractmethod
    async def get_stock(self, stock_id: int, client_id: str) -> ProductStock | None:
        """Get a SKU, only if its product belongs to the tenant."""
        pass

    @abstractmethod
    async def get_stocks_by_ids(
        self, stock_ids: list[int], client_id: str
    ) -> list[ProductStock]:
        """Get the tenant's SKUs among ``stock_ids``; unknown ids are skipped."""
        pass

    @abstractmethod
    async def get_stock_quantity(self, stock_id: int) -> float | None:
        """Current on-hand quantity, or None if the SKU does not exist."""
        pass

    @abstractmethod
    async def apply_stock_delta(
        self, stock_id: int, delta: float, allow_negative: bool = True
    ) -> ProductStock | None:
        """
        Atomically add ``delta`` to a SKU's quantity.

        Returns None when the SKU does not exist, or when ``allow_negative``
        is false and the result would drop below zero.
        """
        pass
