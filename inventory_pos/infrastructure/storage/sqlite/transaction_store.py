"""SQLite implementation of stock transaction and adjustment storage."""

import json
from datetime import datetime

import aiosqlite

from inventory_pos.config import get_logger
from inventory_pos.core.entities.adjustment import AdjustmentType, InventoryAdjustment
from inventory_pos.core.entities.client import Currency
from inventory_pos.core.entities.transaction import (
    DocumentType,
    StockTransaction,
    StockTransactionItem,
    TransactionKind,
)
from inventory_pos.core.interfaces.transaction_store import (
    IAdjustmentStore,
    IStockTransactionStore,
)
from inventory_pos.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from inventory_pos.infrastructure.storage.sqlite.errors import handle_db_errors
from inventory_pos.infrastructure.storage.sqlite.rows import (
    parse_date,
    parse_datetime,
    parse_json,
)

logger = get_logger(__name__)


class SQLiteStockTransactionStore(IStockTransactionStore):
    """SQLite implementation of purchase and sale documents."""

    async def create_transaction(self, transaction: StockTransaction) -> StockTransaction:
        """Insert the header. Items are added one by one with ``add_item``."""
        now = datetime.utcnow()
        transaction.created_at = now
        transaction.updated_at = now
        with handle_db_errors("create_stock_transaction"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO stock_transactions (
                        client_id, kind, party_id, document_type, invoice_number,
                        control_number, document_date, currency,
                        currency_exchange_from, currency_exchange_to, exchange_rate,
                        total, comment, metadata, is_active, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        transaction.client_id,
                        transaction.kind.value,
                        transaction.party_id,
                        transaction.document_type.value,
                        transaction.invoice_number,
                        transaction.control_number,
                        transaction.document_date.isoformat(),
                        transaction.currency.value,
                        transaction.currency_exchange_from.value,
                        transaction.currency_exchange_to.value,
                        transaction.exchange_rate,
                        transaction.total,
                        transaction.comment,
                        json.dumps(transaction.metadata),
                        int(transaction.is_active),
                        transaction.created_at.isoformat(),
                        transaction.updated_at.isoformat(),
                    ),
                )
                transaction.id = cursor.lastrowid
        logger.debug(
            "stock_transaction_header_created",
            transaction_id=transaction.id,
            kind=transaction.kind.value,
        )
        return transaction

    async def add_item(self, item: StockTransactionItem) -> StockTransactionItem:
        item.created_at = datetime.utcnow()
        with handle_db_errors("add_stock_transaction_item"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO stock_transaction_items (
                        transaction_id, product_stock_id, product_id, quantity,
                        amount, update_product_base_cost, is_active, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item.transaction_id,
                        item.product_stock_id,
                        item.product_id,
                        item.quantity,
                        item.amount,
                        int(item.update_product_base_cost),
                        int(item.is_active),
                        item.created_at.isoformat(),
                    ),
                )
                item.id = cursor.lastrowid
        return item

    async def get_transaction(
        self,
        transaction_id: int,
        client_id: str,
        kind: TransactionKind,
        include_inactive: bool = False,
    ) -> StockTransaction | None:
        """Get a document with its items. Inactive ones only on request."""
        query = "SELECT * FROM stock_transactions WHERE id = ? AND client_id = ? AND kind = ?"
        if not include_inactive:
            query += " AND is_active = 1"

        with handle_db_errors("get_stock_transaction"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, (transaction_id, client_id, kind.value))
                row = await cursor.fetchone()
                if row is None:
                    return None
                items = await self._load_items(conn, row["id"])
        return self._row_to_transaction(row, items)

    async def list_transactions(
        self,
        client_id: str,
        kind: TransactionKind,
        include_inactive: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[StockTransaction]:
        query = "SELECT * FROM stock_transactions WHERE client_id = ? AND kind = ?"
        if not include_inactive:
            query += " AND is_active = 1"
        query += " ORDER BY document_date DESC, id DESC LIMIT ? OFFSET ?"

        with handle_db_errors("list_stock_transactions"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, (client_id, kind.value, limit, offset))
                rows = await cursor.fetchall()
                result = []
                for row in rows:
                    items = await self._load_items(conn, row["id"])
                    result.append(self._row_to_transaction(row, items))
        return result

    async def deactivate_transaction(self, transaction_id: int) -> None:
        """Soft delete: header and items are kept, flagged inactive."""
        with handle_db_errors("deactivate_stock_transaction"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE stock_transactions SET is_active = 0, updated_at = ?
                    WHERE id = ?
                    """,
                    (datetime.utcnow().isoformat(), transaction_id),
                )
                await conn.execute(
                    "UPDATE stock_transaction_items SET is_active = 0 WHERE transaction_id = ?",
                    (transaction_id,),
                )
        logger.debug("stock_transaction_deactivated", transaction_id=transaction_id)

    @staticmethod
    async def _load_items(
        conn: aiosqlite.Connection, transaction_id: int
    ) -> list[StockTransactionItem]:
        cursor = await conn.execute(
            "SELECT * FROM stock_transaction_items WHERE transaction_id = ? ORDER BY id",
            (transaction_id,),
        )
        return [
            StockTransactionItem(
                id=row["id"],
                transaction_id=row["transaction_id"],
                product_stock_id=row["product_stock_id"],
                product_id=row["product_id"],
                quantity=float(row["quantity"]),
                amount=float(row["amount"]),
                update_product_base_cost=bool(row["update_product_base_cost"]),
                is_active=bool(row["is_active"]),
                created_at=parse_datetime(row["created_at"]),
            )
            for row in await cursor.fetchall()
        ]

    @staticmethod
    def _row_to_transaction(
        row: aiosqlite.Row, items: list[StockTransactionItem]
    ) -> StockTransaction:
        return StockTransaction(
            id=row["id"],
            client_id=row["client_id"],
            kind=TransactionKind(row["kind"]),
            party_id=row["party_id"],
            document_type=DocumentType(row["document_type"]),
            invoice_number=row["invoice_number"],
            control_number=row["control_number"],
            document_date=parse_date(row["document_date"]),
            currency=Currency(row["currency"]),
            currency_exchange_from=Currency(row["currency_exchange_from"]),
            currency_exchange_to=Currency(row["currency_exchange_to"]),
            exchange_rate=float(row["exchange_rate"]),
            total=float(row["total"]),
            comment=row["comment"],
            metadata=parse_json(row["metadata"], {}),
            is_active=bool(row["is_active"]),
            items=items,
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )


class SQLiteAdjustmentStore(IAdjustmentStore):
    """SQLite implementation of inventory adjustments."""

    async def add_adjustment(
        self, adjustment: InventoryAdjustment
    ) -> InventoryAdjustment:
        with handle_db_errors("add_inventory_adjustment"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO inventory_adjustments (
                        client_id, product_stock_id, adjustment_type,
                        quantity, comment, metadata, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        adjustment.client_id,
                        adjustment.product_stock_id,
                        adjustment.adjustment_type.value,
                        adjustment.quantity,
                        adjustment.comment,
                        json.dumps(adjustment.metadata),
                        adjustment.created_at.isoformat(),
                    ),
                )
                adjustment.id = cursor.lastrowid
        logger.info(
            "inventory_adjustment_recorded",
            adjustment_id=adjustment.id,
            type=adjustment.adjustment_type.value,
            qty=adjustment.quantity,
        )
        return adjustment

    async def list_adjustments(
        self,
        client_id: str,
        adjustment_type: AdjustmentType | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryAdjustment]:
        query = "SELECT * FROM inventory_adjustments WHERE client_id = ?"
        params: list = [client_id]
        if adjustment_type is not None:
            query += " AND adjustment_type = ?"
            params.append(adjustment_type.value)
        query += " ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        with handle_db_errors("list_inventory_adjustments"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, tuple(params))
                rows = await cursor.fetchall()
        return [
            InventoryAdjustment(
                id=row["id"],
                client_id=row["client_id"],
                product_stock_id=row["product_stock_id"],
                adjustment_type=AdjustmentType(row["adjustment_type"]),
                quantity=float(row["quantity"]),
                comment=row["comment"],
                metadata=parse_json(row["metadata"], {}),
                created_at=parse_datetime(row["created_at"]),
            )
            for row in rows
        ]
