"""Reclassification of SQLite errors at the store boundary."""

from collections.abc import Iterator
from contextlib import contextmanager

import aiosqlite

from inventory_pos.config import get_logger
from inventory_pos.core.exceptions import DatabaseError, DuplicateKeyError

logger = get_logger(__name__)


@contextmanager
def handle_db_errors(operation: str) -> Iterator[None]:
    """
    Turn raw SQLite errors into domain errors.

    UNIQUE violations become ``DuplicateKeyError``; anything else becomes
    ``DatabaseError`` after being logged with full detail.
    """
    try:
        yield
    except aiosqlite.IntegrityError as e:
        if "UNIQUE constraint failed" in str(e):
            logger.info("duplicate_key_rejected", operation=operation, error=str(e))
            raise DuplicateKeyError(
                f"Duplicate key during {operation}",
                details={"operation": operation},
            ) from e
        logger.error("database_integrity_error", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e
    except aiosqlite.Error as e:
        logger.error("database_error", operation=operation, error=str(e), exc_info=True)
        raise DatabaseError(operation, str(e)) from e
