"""Tenant bootstrap and party (supplier/customer) creation."""

from inventory_pos.application.dto.requests import CreateClientRequest, CreatePartyRequest
from inventory_pos.application.use_cases.base import UseCase
from inventory_pos.config import get_logger
from inventory_pos.core.entities.client import Client
from inventory_pos.core.entities.party import Party, PartyKind
from inventory_pos.core.exceptions import DuplicateKeyError
from inventory_pos.core.interfaces.client_store import IClientStore, IPartyStore

logger = get_logger(__name__)


class CreateClientUseCase(UseCase):
    """Register a tenant."""

    async def execute(self, request: CreateClientRequest) -> Client:
        store = await self._get_client_store()
        client = Client(name=request.name, main_currency=request.main_currency)
        return await store.create_client(client)


class CreatePartyUseCase(UseCase):
    """Create a supplier or a customer, unique by name within tenant and kind."""

    def __init__(
        self,
        client_store: IClientStore | None = None,
        party_store: IPartyStore | None = None,
    ):
        super().__init__(client_store=client_store)
        self._party_store = party_store

    async def _get_party_store(self) -> IPartyStore:
        if self._party_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_party_store

            self._party_store = await get_party_store()
        return self._party_store

    async def execute(
        self, client_id: str, kind: PartyKind, request: CreatePartyRequest
    ) -> Party:
        await self._get_client(client_id)
        store = await self._get_party_store()

        if await store.find_party_by_name(request.name, client_id, kind) is not None:
            raise DuplicateKeyError(
                f"Already exist a {kind.value} with name '{request.name}'",
                details={"kind": kind.value, "name": request.name},
            )

        party = Party(
            client_id=client_id,
            kind=kind,
            name=request.name,
            identification=request.identification,
            email=request.email,
            phone_number=request.phone_number,
        )
        party = await store.create_party(party)
        logger.info("party_registered", client_id=client_id, kind=kind.value, party_id=party.id)
        return party
