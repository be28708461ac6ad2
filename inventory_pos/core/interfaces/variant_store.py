"""Abstract interface for variant (dimension) storage."""

from abc import ABC, abstractmethod

from inventory_pos.core.entities.lookup import Lookup
from inventory_pos.core.entities.variant import Variant, VariantOption


class IVariantStore(ABC):
    """Interface for variants and their options."""

    @abstractmethod
    async def create_variant(self, variant: Variant) -> Variant:
        """Create a variant together with its options."""
        pass

    @abstractmethod
    async def find_variant(self, lookup: Lookup, client_id: str) -> Variant | None:
        """Get a tenant's variant by id or by case-insensitive name."""
        pass

    @abstractmethod
    async def list_variants(self, client_id: str) -> list[Variant]:
        """All variants of the tenant with options, ordered by id."""
        pass

    @abstractmethod
    async def update_variant(self, variant: Variant) -> Variant:
        """Update name and description."""
        pass

    @abstractmethod
    async def add_option(self, option: VariantOption) -> VariantOption:
        pass

    @abstractmethod
    async def rename_option(self, option_id: int, name: str) -> None:
        pass

    @abstractmethod
    async def delete_option(self, option_id: int) -> None:
        pass

    @abstractmethod
    async def set_can_edit(self, variant_ids: list[int], can_edit: bool) -> None:
        """Lock or unlock a set of variants."""
        pass

    @abstractmethod
    async def delete_variant(self, variant_id: int) -> bool:
        """Delete a variant and its options."""
        pass
