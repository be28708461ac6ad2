"""Product endpoints."""

from fastapi import APIRouter, Depends, Query, status

from inventory_pos.api.dependencies import (
    get_client_id,
    get_create_product_with_variants_use_case,
    get_create_unique_product_use_case,
    get_prod_store,
    get_update_product_use_case,
)
from inventory_pos.application.dto.requests import (
    CreateProductWithVariantsRequest,
    CreateUniqueProductRequest,
    UpdateProductRequest,
)
from inventory_pos.application.dto.responses import (
    ErrorResponse,
    ProductListResponse,
    ProductResponse,
)
from inventory_pos.application.use_cases.create_product import (
    CreateProductWithVariantsUseCase,
    CreateUniqueProductUseCase,
)
from inventory_pos.application.use_cases.update_product import UpdateProductUseCase
from inventory_pos.core.entities.lookup import ById, ByName
from inventory_pos.core.entities.product import Status
from inventory_pos.core.exceptions import ProductNotFoundError
from inventory_pos.infrastructure.storage.sqlite import SQLiteProductStore

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "/unique",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_unique_product(
    request: CreateUniqueProductRequest,
    client_id: str = Depends(get_client_id),
    use_case: CreateUniqueProductUseCase = Depends(get_create_unique_product_use_case),
) -> ProductResponse:
    """Create a product with a single SKU."""
    result = await use_case.execute(client_id, request)
    return use_case.to_response(result)


@router.post(
    "/with-variants",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_product_with_variants(
    request: CreateProductWithVariantsRequest,
    client_id: str = Depends(get_client_id),
    use_case: CreateProductWithVariantsUseCase = Depends(
        get_create_product_with_variants_use_case
    ),
) -> ProductResponse:
    """Create a parent product with one SKU per option combination."""
    result = await use_case.execute(client_id, request)
    return use_case.to_response(result)


@router.get("", response_model=ProductListResponse)
async def list_products(
    product_status: Status | None = Query(default=None, alias="status"),
    limit: int = 100,
    offset: int = 0,
    client_id: str = Depends(get_client_id),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductListResponse:
    """List the tenant's products, optionally filtered by status."""
    products = await store.list_products(
        client_id, status=product_status, limit=limit, offset=offset
    )
    return ProductListResponse(
        products=[ProductResponse.model_validate(p, from_attributes=True) for p in products],
        total=len(products),
        limit=limit,
        offset=offset,
        has_more=len(products) == limit,
    )


@router.get(
    "/by-name/{name}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product_by_name(
    name: str,
    client_id: str = Depends(get_client_id),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductResponse:
    """Get a product by its (case-insensitive) name."""
    product = await store.find_product(ByName(name), client_id)
    if product is None:
        raise ProductNotFoundError(name)
    return ProductResponse.model_validate(product, from_attributes=True)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    client_id: str = Depends(get_client_id),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductResponse:
    """Get a product with its SKUs."""
    product = await store.find_product(ById(product_id), client_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductResponse.model_validate(product, from_attributes=True)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    client_id: str = Depends(get_client_id),
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    """Update descriptive fields, price, base cost or status."""
    result = await use_case.execute(client_id, product_id, request)
    return use_case.to_response(result)
