"""Storage infrastructure implementations."""

from inventory_pos.infrastructure.storage.sqlite import (
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    unit_of_work,
)

__all__ = [
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "unit_of_work",
]
