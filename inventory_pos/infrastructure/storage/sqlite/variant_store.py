"""SQLite implementation of variant storage."""

from datetime import datetime

import aiosqlite

from inventory_pos.config import get_logger
from inventory_pos.core.entities.lookup import ById, Lookup
from inventory_pos.core.entities.variant import Variant, VariantOption
from inventory_pos.core.interfaces.variant_store import IVariantStore
from inventory_pos.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from inventory_pos.infrastructure.storage.sqlite.errors import handle_db_errors
from inventory_pos.infrastructure.storage.sqlite.rows import parse_datetime, placeholders

logger = get_logger(__name__)


class SQLiteVariantStore(IVariantStore):
    """SQLite implementation of variants and variant options."""

    async def create_variant(self, variant: Variant) -> Variant:
        """Create a variant with its options."""
        now = datetime.utcnow()
        variant.created_at = now
        variant.updated_at = now
        with handle_db_errors("create_variant"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO variants (
                        client_id, name, description, can_edit, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        variant.client_id,
                        variant.name,
                        variant.description,
                        int(variant.can_edit),
                        variant.created_at.isoformat(),
                        variant.updated_at.isoformat(),
                    ),
                )
                variant.id = cursor.lastrowid

                for option in variant.options:
                    option.variant_id = variant.id
                    option_cursor = await conn.execute(
                        "INSERT INTO variant_options (variant_id, name) VALUES (?, ?)",
                        (option.variant_id, option.name),
                    )
                    option.id = option_cursor.lastrowid

        logger.info("variant_created", variant_id=variant.id, options=len(variant.options))
        return variant

    async def find_variant(self, lookup: Lookup, client_id: str) -> Variant | None:
        """Get variant by id or name, with options."""
        if isinstance(lookup, ById):
            query = "SELECT * FROM variants WHERE id = ? AND client_id = ?"
            params: tuple = (lookup.id, client_id)
        else:
            query = "SELECT * FROM variants WHERE name = ? AND client_id = ?"
            params = (lookup.name, client_id)

        with handle_db_errors("find_variant"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, params)
                row = await cursor.fetchone()
                if row is None:
                    return None
                options = await self._load_options(conn, [row["id"]])
        return self._row_to_variant(row, options.get(row["id"], []))

    async def list_variants(self, client_id: str) -> list[Variant]:
        with handle_db_errors("list_variants"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM variants WHERE client_id = ? ORDER BY id",
                    (client_id,),
                )
                rows = await cursor.fetchall()
                options = await self._load_options(conn, [row["id"] for row in rows])
        return [self._row_to_variant(row, options.get(row["id"], [])) for row in rows]

    async def update_variant(self, variant: Variant) -> Variant:
        variant.updated_at = datetime.utcnow()
        with handle_db_errors("update_variant"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE variants SET name = ?, description = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        variant.name,
                        variant.description,
                        variant.updated_at.isoformat(),
                        variant.id,
                    ),
                )
        logger.info("variant_updated", variant_id=variant.id)
        return variant

    async def add_option(self, option: VariantOption) -> VariantOption:
        with handle_db_errors("add_variant_option"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "INSERT INTO variant_options (variant_id, name) VALUES (?, ?)",
                    (option.variant_id, option.name),
                )
                option.id = cursor.lastrowid
        return option

    async def rename_option(self, option_id: int, name: str) -> None:
        with handle_db_errors("rename_variant_option"):
            async with get_transaction() as conn:
                await conn.execute(
                    "UPDATE variant_options SET name = ? WHERE id = ?",
                    (name, option_id),
                )

    async def delete_option(self, option_id: int) -> None:
        with handle_db_errors("delete_variant_option"):
            async with get_transaction() as conn:
                await conn.execute("DELETE FROM variant_options WHERE id = ?", (option_id,))

    async def set_can_edit(self, variant_ids: list[int], can_edit: bool) -> None:
        """Lock (or unlock) variants in one statement."""
        if not variant_ids:
            return
        with handle_db_errors("set_variant_can_edit"):
            async with get_transaction() as conn:
                await conn.execute(
                    f"""
                    UPDATE variants SET can_edit = ?, updated_at = ?
                    WHERE id IN ({placeholders(variant_ids)})
                    """,
                    (int(can_edit), datetime.utcnow().isoformat(), *variant_ids),
                )
        logger.info("variants_edit_flag_set", variant_ids=variant_ids, can_edit=can_edit)

    async def delete_variant(self, variant_id: int) -> bool:
        with handle_db_errors("delete_variant"):
            async with get_transaction() as conn:
                await conn.execute(
                    "DELETE FROM variant_options WHERE variant_id = ?", (variant_id,)
                )
                cursor = await conn.execute("DELETE FROM variants WHERE id = ?", (variant_id,))
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("variant_deleted", variant_id=variant_id)
        return deleted

    @staticmethod
    async def _load_options(
        conn: aiosqlite.Connection, variant_ids: list[int]
    ) -> dict[int, list[VariantOption]]:
        if not variant_ids:
            return {}
        cursor = await conn.execute(
            f"""
            SELECT * FROM variant_options
            WHERE variant_id IN ({placeholders(variant_ids)})
            ORDER BY id
            """,
            tuple(variant_ids),
        )
        grouped: dict[int, list[VariantOption]] = {}
        for row in await cursor.fetchall():
            grouped.setdefault(row["variant_id"], []).append(
                VariantOption(id=row["id"], variant_id=row["variant_id"], name=row["name"])
            )
        return grouped

    @staticmethod
    def _row_to_variant(row: aiosqlite.Row, options: list[VariantOption]) -> Variant:
        return Variant(
            id=row["id"],
            client_id=row["client_id"],
            name=row["name"],
            description=row["description"],
            can_edit=bool(row["can_edit"]),
            options=options,
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
