"""Variant management endpoints."""

from fastapi import APIRouter, Depends, status

from inventory_pos.api.dependencies import (
    get_client_id,
    get_create_variant_use_case,
    get_delete_variant_use_case,
    get_update_variant_use_case,
    get_var_store,
)
from inventory_pos.application.dto.requests import (
    CreateVariantRequest,
    UpdateVariantRequest,
)
from inventory_pos.application.dto.responses import (
    ErrorResponse,
    VariantListResponse,
    VariantResponse,
)
from inventory_pos.application.use_cases.manage_variants import (
    CreateVariantUseCase,
    DeleteVariantUseCase,
    UpdateVariantUseCase,
)
from inventory_pos.core.entities.lookup import ById
from inventory_pos.core.exceptions import VariantNotFoundError
from inventory_pos.infrastructure.storage.sqlite import SQLiteVariantStore

router = APIRouter(prefix="/api/variants", tags=["variants"])


@router.post(
    "",
    response_model=VariantResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_variant(
    request: CreateVariantRequest,
    client_id: str = Depends(get_client_id),
    use_case: CreateVariantUseCase = Depends(get_create_variant_use_case),
) -> VariantResponse:
    """Create a variant (e.g. Size) with its options."""
    result = await use_case.execute(client_id, request)
    return use_case.to_response(result)


@router.get("", response_model=VariantListResponse)
async def list_variants(
    client_id: str = Depends(get_client_id),
    store: SQLiteVariantStore = Depends(get_var_store),
) -> VariantListResponse:
    """List the tenant's variants with their options."""
    variants = await store.list_variants(client_id)
    return VariantListResponse(
        variants=[VariantResponse.model_validate(v, from_attributes=True) for v in variants],
        total=len(variants),
    )


@router.get(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_variant(
    variant_id: int,
    client_id: str = Depends(get_client_id),
    store: SQLiteVariantStore = Depends(get_var_store),
) -> VariantResponse:
    """Get a variant by id."""
    variant = await store.find_variant(ById(variant_id), client_id)
    if variant is None:
        raise VariantNotFoundError(variant_id)
    return VariantResponse.model_validate(variant, from_attributes=True)


@router.patch(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_variant(
    variant_id: int,
    request: UpdateVariantRequest,
    client_id: str = Depends(get_client_id),
    use_case: UpdateVariantUseCase = Depends(get_update_variant_use_case),
) -> VariantResponse:
    """Rename a variant or add, rename and remove its options."""
    result = await use_case.execute(client_id, variant_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_variant(
    variant_id: int,
    client_id: str = Depends(get_client_id),
    use_case: DeleteVariantUseCase = Depends(get_delete_variant_use_case),
) -> VariantResponse:
    """Delete a variant no product is built from."""
    result = await use_case.execute(client_id, variant_id)
    return use_case.to_response(result)
