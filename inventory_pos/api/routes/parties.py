"""Supplier and customer endpoints.

Both resources share one shape; each gets its own router.
"""

from fastapi import APIRouter, Depends, status

from inventory_pos.api.dependencies import (
    get_client_id,
    get_create_party_use_case,
    get_pty_store,
)
from inventory_pos.application.dto.requests import CreatePartyRequest
from inventory_pos.application.dto.responses import (
    ErrorResponse,
    PartyListResponse,
    PartyResponse,
)
from inventory_pos.application.use_cases.manage_clients import CreatePartyUseCase
from inventory_pos.core.entities.party import PartyKind
from inventory_pos.core.exceptions import PartyNotFoundError
from inventory_pos.infrastructure.storage.sqlite import SQLitePartyStore


def build_party_router(kind: PartyKind, prefix: str) -> APIRouter:
    """Create, list and get routes for one party kind."""
    router = APIRouter(prefix=prefix, tags=[prefix.rsplit("/", 1)[-1]])

    @router.post(
        "",
        response_model=PartyResponse,
        status_code=status.HTTP_201_CREATED,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    )
    async def create_party(
        request: CreatePartyRequest,
        client_id: str = Depends(get_client_id),
        use_case: CreatePartyUseCase = Depends(get_create_party_use_case),
    ) -> PartyResponse:
        party = await use_case.execute(client_id, kind, request)
        return PartyResponse.model_validate(party, from_attributes=True)

    @router.get("", response_model=PartyListResponse)
    async def list_parties(
        limit: int = 100,
        offset: int = 0,
        client_id: str = Depends(get_client_id),
        store: SQLitePartyStore = Depends(get_pty_store),
    ) -> PartyListResponse:
        parties = await store.list_parties(client_id, kind, limit=limit, offset=offset)
        return PartyListResponse(
            parties=[PartyResponse.model_validate(p, from_attributes=True) for p in parties],
            total=len(parties),
            limit=limit,
            offset=offset,
            has_more=len(parties) == limit,
        )

    @router.get(
        "/{party_id}",
        response_model=PartyResponse,
        responses={404: {"model": ErrorResponse}},
    )
    async def get_party(
        party_id: int,
        client_id: str = Depends(get_client_id),
        store: SQLitePartyStore = Depends(get_pty_store),
    ) -> PartyResponse:
        party = await store.get_party(party_id, client_id, kind)
        if party is None:
            raise PartyNotFoundError(kind.value, party_id)
        return PartyResponse.model_validate(party, from_attributes=True)

    return router


suppliers_router = build_party_router(PartyKind.SUPPLIER, "/api/suppliers")
customers_router = build_party_router(PartyKind.CUSTOMER, "/api/customers")
