"""Tenant bootstrap endpoints."""

from fastapi import APIRouter, Depends, status

from inventory_pos.api.dependencies import get_cli_store, get_create_client_use_case
from inventory_pos.application.dto.requests import CreateClientRequest
from inventory_pos.application.dto.responses import ClientResponse, ErrorResponse
from inventory_pos.application.use_cases.manage_clients import CreateClientUseCase
from inventory_pos.core.exceptions import ClientNotFoundError
from inventory_pos.infrastructure.storage.sqlite import SQLiteClientStore

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    request: CreateClientRequest,
    use_case: CreateClientUseCase = Depends(get_create_client_use_case),
) -> ClientResponse:
    """Register a tenant. Its id is the value of the X-Client-Id header."""
    client = await use_case.execute(request)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_client(
    client_id: str,
    store: SQLiteClientStore = Depends(get_cli_store),
) -> ClientResponse:
    """Get a tenant by id."""
    client = await store.get_client(client_id)
    if client is None:
        raise ClientNotFoundError(client_id)
    return ClientResponse.model_validate(client, from_attributes=True)
