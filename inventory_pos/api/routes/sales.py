"""Sale endpoints."""

from fastapi import APIRouter, Depends, status

from inventory_pos.api.dependencies import (
    get_client_id,
    get_create_sale_use_case,
    get_delete_sale_use_case,
    get_tx_store,
)
from inventory_pos.application.dto.requests import CreateSaleRequest
from inventory_pos.application.dto.responses import (
    ErrorResponse,
    StockTransactionListResponse,
    StockTransactionResponse,
)
from inventory_pos.application.use_cases.create_sale import CreateSaleUseCase
from inventory_pos.application.use_cases.delete_stock_transaction import DeleteSaleUseCase
from inventory_pos.core.entities.transaction import TransactionKind
from inventory_pos.core.exceptions import StockTransactionNotFoundError
from inventory_pos.infrastructure.storage.sqlite import SQLiteStockTransactionStore

router = APIRouter(prefix="/api/sales", tags=["sales"])


@router.post(
    "",
    response_model=StockTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_sale(
    request: CreateSaleRequest,
    client_id: str = Depends(get_client_id),
    use_case: CreateSaleUseCase = Depends(get_create_sale_use_case),
) -> StockTransactionResponse:
    """
    Record a sale.

    Lines are priced at the product price and decrement every SKU.
    """
    result = await use_case.execute(client_id, request)
    return use_case.to_response(result)


@router.get("", response_model=StockTransactionListResponse)
async def list_sales(
    include_inactive: bool = False,
    limit: int = 100,
    offset: int = 0,
    client_id: str = Depends(get_client_id),
    store: SQLiteStockTransactionStore = Depends(get_tx_store),
) -> StockTransactionListResponse:
    """List sales, newest first."""
    transactions = await store.list_transactions(
        client_id,
        TransactionKind.SALE,
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
    "/{sale_id}",
    response_model=StockTransactionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_sale(
    sale_id: int,
    client_id: str = Depends(get_client_id),
    store: SQLiteStockTransactionStore = Depends(get_tx_store),
) -> StockTransactionResponse:
    """Get a sale with its lines, deleted ones included."""
    transaction = await store.get_transaction(
        sale_id, client_id, TransactionKind.SALE, include_inactive=True
    )
    if transaction is None:
        raise StockTransactionNotFoundError(TransactionKind.SALE.value, sale_id)
    return StockTransactionResponse.model_validate(transaction, from_attributes=True)


@router.delete(
    "/{sale_id}",
    response_model=StockTransactionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_sale(
    sale_id: int,
    client_id: str = Depends(get_client_id),
    use_case: DeleteSaleUseCase = Depends(get_delete_sale_use_case),
) -> StockTransactionResponse:
    """Soft-delete a sale and reverse its stock effects."""
    result = await use_case.execute(client_id, sale_id)
    return use_case.to_response(result)
