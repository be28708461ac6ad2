"""Purchase endpoints."""

from fastapi import APIRouter, Depends, status

from inventory_pos.api.dependencies import (
    get_client_id,
    get_create_purchase_use_case,
    get_delete_purchase_use_case,
    get_tx_store,
)
from inventory_pos.application.dto.requests import CreatePurchaseRequest
from inventory_pos.application.dto.responses import (
    ErrorResponse,
    StockTransactionListResponse,
    StockTransactionResponse,
)
from inventory_pos.application.use_cases.create_purchase import CreatePurchaseUseCase
from inventory_pos.application.use_cases.delete_stock_transaction import DeletePurchaseUseCase
from inventory_pos.core.entities.transaction import TransactionKind
from inventory_pos.core.exceptions import StockTransactionNotFoundError
from inventory_pos.infrastructure.storage.sqlite import SQLiteStockTransactionStore

router = APIRouter(prefix="/api/purchases", tags=["purchases"])


@router.post(
    "",
    response_model=StockTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_purchase(
    request: CreatePurchaseRequest,
    client_id: str = Depends(get_client_id),
    use_case: CreatePurchaseUseCase = Depends(get_create_purchase_use_case),
) -> StockTransactionResponse:
    """
    Record a purchase.

    Increments every SKU and updates each product's average cost.
    """
    result = await use_case.execute(client_id, request)
    return use_case.to_response(result)


@router.get("", response_model=StockTransactionListResponse)
async def list_purchases(
    include_inactive: bool = False,
    limit: int = 100,
    offset: int = 0,
    client_id: str = Depends(get_client_id),
    store: SQLiteStockTransactionStore = Depends(get_tx_store),
) -> StockTransactionListResponse:
    """List purchases, newest first."""
    transactions = await store.list_transactions(
        client_id,
        TransactionKind.PURCHASE,
        include_inactive=include_inactive,
        limit=limit,
        offset=offset,
    )
    return StockTransactionListResponse(
        transactions=[
            StockTransactionResponse.model_validate(t, from_attributes=True)
            for t in transactions
        ],
        total=len(transactions),
        limit=limit,
        offset=offset,
        has_more=len(transactions) == limit,
    )


@router.get(
    "/{purchase_id}",
    response_model=StockTransactionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase(
    purchase_id: int,
    client_id: str = Depends(get_client_id),
    store: SQLiteStockTransactionStore = Depends(get_tx_store),
) -> StockTransactionResponse:
    """Get a purchase with its lines, deleted ones included."""
    transaction = await store.get_transaction(
        purchase_id, client_id, TransactionKind.PURCHASE, include_inactive=True
    )
    if transaction is None:
        raise StockTransactionNotFoundError(TransactionKind.PURCHASE.value, purchase_id)
    return StockTransactionResponse.model_validate(transaction, from_attributes=True)


@router.delete(
    "/{purchase_id}",
    response_model=StockTransactionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_purchase(
    purchase_id: int,
    client_id: str = Depends(get_client_id),
    use_case: DeletePurchaseUseCase = Depends(get_delete_purchase_use_case),
) -> StockTransactionResponse:
    """Soft-delete a purchase and reverse its stock and cost effects."""
    result = await use_case.execute(client_id, purchase_id)
    return use_case.to_response(result)
