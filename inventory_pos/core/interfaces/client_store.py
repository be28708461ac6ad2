"""Abstract interfaces for tenant and party storage."""

from abc import ABC, abstractmethod

from inventory_pos.core.entities.client import Client
from inventory_pos.core.entities.party import Party, PartyKind


class IClientStore(ABC):
    """Interface for tenant persistence."""

    @abstractmethod
    async def create_client(self, client: Client) -> Client:
        """Create a new tenant."""
        pass

    @abstractmethod
    async def get_client(self, client_id: str) -> Client | None:
        """Get tenant by ID."""
        pass


class IPartyStore(ABC):
    """Interface for supplier and customer persistence."""

    @abstractmethod
    async def create_party(self, party: Party) -> Party:
        """Create a supplier or customer."""
        pass

    @abstractmethod
    async def get_party(
        self, party_id: int, client_id: str, kind: PartyKind
    ) -> Party | None:
        """Get an active party of the given kind owned by the tenant."""
        pass

    @abstractmethod
    async def find_party_by_name(
        self, name: str, client_id: str, kind: PartyKind
    ) -> Party | None:
        """Case-insensitive name lookup within tenant and kind."""
        pass

    @abstractmethod
    async def list_parties(
        self,
        client_id: str,
        kind: PartyKind,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Party]:
        """List parties of one kind for the tenant."""
        pass
