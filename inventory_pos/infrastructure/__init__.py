"""Infrastructure layer implementations."""

from inventory_pos.infrastructure import storage

__all__ = ["storage"]
