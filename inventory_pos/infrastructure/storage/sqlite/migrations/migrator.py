"""
Schema migrator for the inventory database.

Migrations are ``vNNN_name.sql`` files next to this module, applied in
version order and recorded with a checksum in ``schema_migrations``. A
migration whose file changed after it was applied stops the run.
"""

import asyncio
import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from inventory_pos.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = [
    "clients",
    "parties",
    "variants",
    "variant_options",
    "products",
    "product_variants",
    "product_stocks",
    "stock_transactions",
    "stock_transaction_items",
    "inventory_adjustments",
    "schema_migrations",
]


@dataclass
class MigrationInfo:
    """A migration file."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = re.match(r"v(\d+)_(.+)\.sql", path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order."""
    return [MigrationInfo.from_file(path) for path in sorted(MIGRATIONS_DIR.glob("v*.sql"))]


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to their checksums; empty for a fresh file."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.time()

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed = int((time.time() - start) * 1000)
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=int((time.time() - start) * 1000),
            error=str(e),
        )

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


async def initialize_database(db_path: Path | None = None) -> list[MigrationResult]:
    """
    Apply every pending migration.

    Returns:
        Results for the migrations that were attempted, in order
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        applied = await get_applied_migrations(conn)
        for migration in discover_migrations():
            if migration.version in applied:
                if applied[migration.version] != migration.checksum:
                    logger.error("migration_checksum_changed", version=migration.version)
                    break
                continue

            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break

    return results


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied and pending migrations."""
    db_path = db_path or get_settings().storage.db_path
    discovered = discover_migrations()

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [m.version for m in discovered],
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    versions = sorted(applied)
    return {
        "exists": True,
        "current_version": versions[-1] if versions else None,
        "applied_migrations": versions,
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """Foreign keys, SQLite integrity check and the inventory tables."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = await cursor.fetchall()

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        existing = {row[0] for row in await cursor.fetchall()}

    missing = [table for table in REQUIRED_TABLES if table not in existing]
    return [
        {
            "check": "foreign_keys",
            "status": "PASS" if not fk_violations else "FAIL",
            "violations": len(fk_violations),
        },
        {"check": "integrity", "status": "PASS" if integrity == "ok" else "FAIL", "result": integrity},
        {"check": "required_tables", "status": "PASS" if not missing else "FAIL", "missing": missing},
    ]


def main() -> None:
    """CLI entry point: migrate, or report with --status / --verify."""
    import argparse

    parser = argparse.ArgumentParser(description="Inventory POS database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--verify", action="store_true", help="Verify schema integrity")
    args = parser.parse_args()

    async def run():
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"Current version: {status['current_version']}")
            print(f"Pending migrations: {status['pending_migrations']}")
        elif args.verify:
            for check in await verify_schema_integrity(args.db_path):
                print(f"[{check['status']}] {check['check']}")
        else:
            for result in await initialize_database(args.db_path):
                outcome = "SUCCESS" if result.success else "FAILED"
                print(f"[{outcome}] v{result.version}: {result.name}")
                if result.error:
                    print(f"    {result.error}")

    asyncio.run(run())


if __name__ == "__main__":
    main()
