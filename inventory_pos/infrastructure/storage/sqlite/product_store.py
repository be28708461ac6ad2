"""SQLite implementation of product and SKU storage."""

import json
from datetime import datetime

import aiosqlite

from inventory_pos.config import get_logger
from inventory_pos.core.entities.lookup import ById, Lookup
from inventory_pos.core.entities.product import (
    MeasureUnitType,
    Product,
    ProductStock,
    ProductType,
    Status,
    StockType,
)
from inventory_pos.core.interfaces.product_store import IProductStore
from inventory_pos.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from inventory_pos.infrastructure.storage.sqlite.errors import handle_db_errors
from inventory_pos.infrastructure.storage.sqlite.rows import (
    dump_combination,
    parse_datetime,
    parse_json,
    placeholders,
)

logger = get_logger(__name__)


class SQLiteProductStore(IProductStore):
    """
    SQLite implementation of products and product stocks.

    Quantity changes are single ``UPDATE ... SET quantity = quantity + ?``
    statements. Cost changes are conditioned on the product ``version``.
    """

    # Product operations
    async def create_product(self, product: Product) -> Product:
        now = datetime.utcnow()
        product.created_at = now
        product.updated_at = now
        with handle_db_errors("create_product"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO products (
                        client_id, type, reference, name, description, unit_type,
                        base_cost, average_cost, total_for_average_cost, price,
                        status, metadata, version, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.client_id,
                        product.type.value,
                        product.reference,
                        product.name,
                        product.description,
                        product.unit_type.value,
                        product.base_cost,
                        product.average_cost,
                        product.total_for_average_cost,
                        product.price,
                        product.status.value,
                        json.dumps(product.metadata),
                        product.version,
                        product.created_at.isoformat(),
                        product.updated_at.isoformat(),
                    ),
                )
                product.id = cursor.lastrowid
        logger.info("product_created", product_id=product.id, type=product.type.value)
        return product

    async def find_product(self, lookup: Lookup, client_id: str) -> Product | None:
        """Get product by id or (case-insensitive) name, with stocks."""
        if isinstance(lookup, ById):
            query = "SELECT * FROM products WHERE id = ? AND client_id = ?"
            params: tuple = (lookup.id, client_id)
        else:
            query = "SELECT * FROM products WHERE name = ? AND client_id = ?"
            params = (lookup.name, client_id)

        with handle_db_errors("find_product"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, params)
                row = await cursor.fetchone()
                if row is None:
                    return None
                return await self._load_product(conn, row)

    async def list_products(
        self,
        client_id: str,
        status: Status | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        query = "SELECT * FROM products WHERE client_id = ?"
        params: list = [client_id]
        if status is not None:
            query += " AND status = ?"
            params.append(status.value)
        query += " ORDER BY name LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        with handle_db_errors("list_products"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, tuple(params))
                rows = await cursor.fetchall()
                return [await self._load_product(conn, row) for row in rows]

    async def update_product(self, product: Product) -> Product:
        """Update descriptive fields and base cost; average cost and its divisor are left alone."""
        product.updated_at = datetime.utcnow()
        with handle_db_errors("update_product"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE products SET
                        reference = ?, name = ?, description = ?, unit_type = ?,
                        base_cost = ?, price = ?, status = ?, metadata = ?,
                        updated_at = ?, version = version + 1
                    WHERE id = ?
                    """,
                    (
                        product.reference,
                        product.name,
                        product.description,
                        product.unit_type.value,
                        product.base_cost,
                        product.price,
                        product.status.value,
                        json.dumps(product.metadata),
                        product.updated_at.isoformat(),
                        product.id,
                    ),
                )
                product.version += 1
        logger.info("product_updated", product_id=product.id)
        return product

    async def link_variants(self, product_id: int, variant_ids: list[int]) -> None:
        with handle_db_errors("link_product_variants"):
            async with get_transaction() as conn:
                await conn.executemany(
                    "INSERT INTO product_variants (product_id, variant_id) VALUES (?, ?)",
                    [(product_id, variant_id) for variant_id in variant_ids],
                )

    async def update_cost_fields(
        self,
        product_id: int,
        expected_version: int,
        base_cost: float,
        average_cost: float,
        total_for_average_cost: float,
    ) -> Product | None:
        """Compare-and-swap on ``version``."""
        with handle_db_errors("update_product_cost"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE products SET
                        base_cost = ?,
                        average_cost = ?,
                        total_for_average_cost = ?,
                        version = version + 1,
                        updated_at = ?
                    WHERE id = ? AND version = ?
                    """,
                    (
                        base_cost,
                        average_cost,
                        total_for_average_cost,
                        datetime.utcnow().isoformat(),
                        product_id,
                        expected_version,
                    ),
                )
                if cursor.rowcount == 0:
                    return None
                cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
                row = await cursor.fetchone()
                return await self._load_product(conn, row)

    # Stock operations
    async def create_stock(self, stock: ProductStock) -> ProductStock:
        now = datetime.utcnow()
        stock.created_at = now
        stock.updated_at = now
        with handle_db_errors("create_product_stock"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO product_stocks (
                        product_id, type, option_combination, initial_quantity,
                        quantity, cost, status, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        stock.product_id,
                        stock.type.value,
                        dump_combination(stock.option_combination),
                        stock.initial_quantity,
                        stock.quantity,
                        stock.cost,
                        stock.status.value,
                        stock.created_at.isoformat(),
                        stock.updated_at.isoformat(),
                    ),
                )
                stock.id = cursor.lastrowid
        return stock

    async def get_stock(self, stock_id: int, client_id: str) -> ProductStock | None:
        stocks = await self.get_stocks_by_ids([stock_id], client_id)
        return stocks[0] if stocks else None

    async def get_stocks_by_ids(
        self, stock_ids: list[int], client_id: str
    ) -> list[ProductStock]:
        """SKUs among ``stock_ids`` whose product belongs to the tenant."""
        unique_ids = list(dict.fromkeys(stock_ids))
        if not unique_ids:
            return []
        with handle_db_errors("get_product_stocks"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    f"""
                    SELECT ps.* FROM product_stocks ps
                    JOIN products p ON p.id = ps.product_id
                    WHERE p.client_id = ? AND ps.id IN ({placeholders(unique_ids)})
                    ORDER BY ps.id
                    """,
                    (client_id, *unique_ids),
                )
                rows = await cursor.fetchall()
        return [self._row_to_stock(row) for row in rows]

    async def get_stock_quantity(self, stock_id: int) -> float | None:
        with handle_db_errors("get_stock_quantity"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT quantity FROM product_stocks WHERE id = ?", (stock_id,)
                )
                row = await cursor.fetchone()
        return float(row["quantity"]) if row else None

    async def apply_stock_delta(
        self, stock_id: int, delta: float, allow_negative: bool = True
    ) -> ProductStock | None:
        """Single atomic increment; optionally refuses to go below zero."""
        query = """
            UPDATE product_stocks SET quantity = quantity + ?, updated_at = ?
            WHERE id = ?
        """
        params: tuple = (delta, datetime.utcnow().isoformat(), stock_id)
        if not allow_negative:
            query += " AND quantity + ? >= 0"
            params = (*params, delta)

        with handle_db_errors("apply_stock_delta"):
            async with get_transaction() as conn:
                cursor = await conn.execute(query, params)
                if cursor.rowcount == 0:
                    return None
                cursor = await conn.execute(
                    "SELECT * FROM product_stocks WHERE id = ?", (stock_id,)
                )
                row = await cursor.fetchone()
        return self._row_to_stock(row)

    async def _load_product(self, conn: aiosqlite.Connection, row: aiosqlite.Row) -> Product:
        cursor = await conn.execute(
            "SELECT * FROM product_stocks WHERE product_id = ? ORDER BY id",
            (row["id"],),
        )
        stocks = [self._row_to_stock(r) for r in await cursor.fetchall()]

        cursor = await conn.execute(
            "SELECT variant_id FROM product_variants WHERE product_id = ? ORDER BY variant_id",
            (row["id"],),
        )
        variant_ids = [r["variant_id"] for r in await cursor.fetchall()]

        return Product(
            id=row["id"],
            client_id=row["client_id"],
            type=ProductType(row["type"]),
            reference=row["reference"],
            name=row["name"],
            description=row["description"],
            unit_type=MeasureUnitType(row["unit_type"]),
            base_cost=float(row["base_cost"]),
            average_cost=float(row["average_cost"]),
            total_for_average_cost=float(row["total_for_average_cost"]),
            price=float(row["price"]),
            status=Status(row["status"]),
            metadata=parse_json(row["metadata"], {}),
            version=row["version"],
            variant_ids=variant_ids,
            stocks=stocks,
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    @staticmethod
    def _row_to_stock(row: aiosqlite.Row) -> ProductStock:
        return ProductStock(
            id=row["id"],
            product_id=row["product_id"],
            type=StockType(row["type"]),
            option_combination=parse_json(row["option_combination"], []),
            initial_quantity=float(row["initial_quantity"]),
            quantity=float(row["quantity"]),
            cost=float(row["cost"]),
            status=Status(row["status"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
