"""SQLite implementation of tenant and party storage."""

from datetime import datetime

import aiosqlite

from inventory_pos.config import get_logger
from inventory_pos.core.entities.client import Client, Currency
from inventory_pos.core.entities.party import Party, PartyKind
from inventory_pos.core.interfaces.client_store import IClientStore, IPartyStore
from inventory_pos.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from inventory_pos.infrastructure.storage.sqlite.errors import handle_db_errors
from inventory_pos.infrastructure.storage.sqlite.rows import parse_datetime

logger = get_logger(__name__)


class SQLiteClientStore(IClientStore):
    """SQLite implementation of tenant storage."""

    async def create_client(self, client: Client) -> Client:
        now = datetime.utcnow()
        client.created_at = now
        client.updated_at = now
        with handle_db_errors("create_client"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO clients (id, name, main_currency, is_active, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        client.id,
                        client.name,
                        client.main_currency.value,
                        int(client.is_active),
                        client.created_at.isoformat(),
                        client.updated_at.isoformat(),
                    ),
                )
        logger.info("client_created", client_id=client.id, main_currency=client.main_currency.value)
        return client

    async def get_client(self, client_id: str) -> Client | None:
        with handle_db_errors("get_client"):
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT * FROM clients WHERE id = ?", (client_id,))
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_client(row)

    @staticmethod
    def _row_to_client(row: aiosqlite.Row) -> Client:
        return Client(
            id=row["id"],
            name=row["name"],
            main_currency=Currency(row["main_currency"]),
            is_active=bool(row["is_active"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )


class SQLitePartyStore(IPartyStore):
    """SQLite implementation of supplier and customer storage."""

    async def create_party(self, party: Party) -> Party:
        party.created_at = datetime.utcnow()
        with handle_db_errors("create_party"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO parties (
                        client_id, kind, name, identification,
                        email, phone_number, is_active, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        party.client_id,
                        party.kind.value,
                        party.name,
                        party.identification,
                        party.email,
                        party.phone_number,
                        int(party.is_active),
                        party.created_at.isoformat(),
                    ),
                )
                party.id = cursor.lastrowid
        logger.info("party_created", party_id=party.id, kind=party.kind.value)
        return party

    async def get_party(
        self, party_id: int, client_id: str, kind: PartyKind
    ) -> Party | None:
        with handle_db_errors("get_party"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM parties
                    WHERE id = ? AND client_id = ? AND kind = ? AND is_active = 1
                    """,
                    (party_id, client_id, kind.value),
                )
                row = await cursor.fetchone()
        return self._row_to_party(row) if row else None

    async def find_party_by_name(
        self, name: str, client_id: str, kind: PartyKind
    ) -> Party | None:
        with handle_db_errors("find_party_by_name"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM parties WHERE client_id = ? AND kind = ? AND name = ?",
                    (client_id, kind.value, name),
                )
                row = await cursor.fetchone()
        return self._row_to_party(row) if row else None

    async def list_parties(
        self,
        client_id: str,
        kind: PartyKind,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Party]:
        with handle_db_errors("list_parties"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM parties
                    WHERE client_id = ? AND kind = ? AND is_active = 1
                    ORDER BY name
                    LIMIT ? OFFSET ?
                    """,
                    (client_id, kind.value, limit, offset),
                )
                rows = await cursor.fetchall()
        return [self._row_to_party(row) for row in rows]

    @staticmethod
    def _row_to_party(row: aiosqlite.Row) -> Party:
        return Party(
            id=row["id"],
            client_id=row["client_id"],
            kind=PartyKind(row["kind"]),
            name=row["name"],
            identification=row["identification"],
            email=row["email"],
            phone_number=row["phone_number"],
            is_active=bool(row["is_active"]),
            created_at=parse_datetime(row["created_at"]),
        )
