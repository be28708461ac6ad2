"""Inventory endpoints: manual adjustments and SKU lookup."""

from fastapi import APIRouter, Depends, status

from inventory_pos.api.dependencies import (
    get_adj_store,
    get_adjust_inventory_use_case,
    get_client_id,
    get_prod_store,
)
from inventory_pos.application.dto.requests import CreateInventoryAdjustmentRequest
from inventory_pos.application.dto.responses import (
    AdjustInventoryResponse,
    ErrorResponse,
    InventoryAdjustmentListResponse,
    InventoryAdjustmentResponse,
    ProductStockResponse,
)
from inventory_pos.application.use_cases.adjust_inventory import AdjustInventoryUseCase
from inventory_pos.core.entities.adjustment import AdjustmentType
from inventory_pos.core.exceptions import ProductStockNotFoundError
from inventory_pos.infrastructure.storage.sqlite import (
    SQLiteAdjustmentStore,
    SQLiteProductStore,
)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "/adjustments",
    response_model=AdjustInventoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_inventory(
    request: CreateInventoryAdjustmentRequest,
    client_id: str = Depends(get_client_id),
    use_case: AdjustInventoryUseCase = Depends(get_adjust_inventory_use_case),
) -> AdjustInventoryResponse:
    """Increment or decrement a SKU outside of purchases and sales."""
    result = await use_case.execute(client_id, request)
    return use_case.to_response(result)


@router.get("/adjustments", response_model=InventoryAdjustmentListResponse)
async def list_adjustments(
    adjustment_type: AdjustmentType | None = None,
    limit: int = 100,
    offset: int = 0,
    client_id: str = Depends(get_client_id),
    store: SQLiteAdjustmentStore = Depends(get_adj_store),
) -> InventoryAdjustmentListResponse:
    """List manual adjustments, newest first."""
    adjustments = await store.list_adjustments(
        client_id, adjustment_type=adjustment_type, limit=limit, offset=offset
    )
    return InventoryAdjustmentListResponse(
        adjustments=[
            InventoryAdjustmentResponse.model_validate(a, from_attributes=True)
            for a in adjustments
        ],
        total=len(adjustments),
        limit=limit,
        offset=offset,
        has_more=len(adjustments) == limit,
    )


@router.get(
    "/stocks/{stock_id}",
    response_model=ProductStockResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_stock(
    stock_id: int,
    client_id: str = Depends(get_client_id),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductStockResponse:
    """Current on-hand quantity of a SKU."""
    stock = await store.get_stock(stock_id, client_id)
    if stock is None:
        raise ProductStockNotFoundError([stock_id])
    return ProductStockResponse.model_validate(stock, from_attributes=True)
