"""Tests for the schema migrator."""

from pathlib import Path

import aiosqlite
import pytest

from inventory_pos.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestDiscovery:
    def test_discovers_initial_schema(self):
        migrations = discover_migrations()
        assert migrations[0].version == "001"
        assert migrations[0].name == "initial_schema"
        assert len(migrations[0].checksum) == 16

    def test_rejects_bad_filename(self, tmp_path: Path):
        bad = tmp_path / "initial.sql"
        bad.write_text("SELECT 1;")
        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(bad)


class TestInitializeDatabase:
    async def test_fresh_database(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path)

        assert [r.version for r in results] == ["001"]
        assert all(r.success for r in results)

        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert set(REQUIRED_TABLES) <= tables

    async def test_is_idempotent(self, temp_db_path: Path):
        await initialize_database(temp_db_path)
        results = await initialize_database(temp_db_path)

        assert results == []

    async def test_status_and_integrity(self, temp_db_path: Path):
        missing = await get_migration_status(temp_db_path)
        assert missing["exists"] is False
        assert missing["pending_migrations"] == ["001"]

        await initialize_database(temp_db_path)

        status = await get_migration_status(temp_db_path)
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

        checks = await verify_schema_integrity(temp_db_path)
        assert all(check["status"] == "PASS" for check in checks)
