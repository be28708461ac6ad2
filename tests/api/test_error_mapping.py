"""Error family to HTTP status mapping."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from inventory_pos.api.dependencies import (
    get_cli_store,
    get_create_purchase_use_case,
    get_delete_sale_use_case,
)
from inventory_pos.api.main import app
from inventory_pos.application.use_cases.create_purchase import CreatePurchaseUseCase
from inventory_pos.application.use_cases.delete_stock_transaction import DeleteSaleUseCase
from inventory_pos.core.entities.client import Client
from inventory_pos.core.exceptions import (
    DatabaseError,
    DuplicateKeyError,
    InsufficientStockError,
    ProductStockNotFoundError,
    StockTransactionNotFoundError,
)

PURCHASE = {
    "supplier_id": 1,
    "currency": "USD",
    "purchase_items": [{"product_stock_id": 11, "quantity": 2, "amount": 3.5}],
}


@pytest.fixture
def purchase_use_case(api_app):
    uc = AsyncMock(spec=CreatePurchaseUseCase)
    api_app.dependency_overrides[get_create_purchase_use_case] = lambda: uc
    return uc


class TestDomainErrors:
    async def test_not_found_is_404(self, api_client, purchase_use_case):
        purchase_use_case.execute.side_effect = ProductStockNotFoundError([11, 12])

        response = await api_client.post("/api/purchases", json=PURCHASE)

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "PRODUCT_STOCK_NOT_FOUND"
        assert "NotFoundCount: (2)" in data["message"]
        assert data["path"] == "/api/purchases"

    async def test_duplicate_is_409(self, api_client, purchase_use_case):
        purchase_use_case.execute.side_effect = DuplicateKeyError("Already exist")

        response = await api_client.post("/api/purchases", json=PURCHASE)

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_KEY"

    async def test_validation_is_400(self, api_client, purchase_use_case):
        purchase_use_case.execute.side_effect = InsufficientStockError(11, 5, 2)

        response = await api_client.post("/api/purchases", json=PURCHASE)

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INSUFFICIENT_STOCK"
        assert data["detail"] == "field: quantity"
        assert data["message"].startswith("Insufficient stock")

    async def test_internal_error_is_generic(self, api_client, purchase_use_case):
        purchase_use_case.execute.side_effect = DatabaseError("create", "disk I/O error")

        response = await api_client.post("/api/purchases", json=PURCHASE)

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "Internal server error. Check server logs"
        assert "disk" not in response.text

    async def test_unexpected_exception_is_generic(self, api_client, purchase_use_case):
        purchase_use_case.execute.side_effect = RuntimeError("secret detail")

        response = await api_client.post("/api/purchases", json=PURCHASE)

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
        assert "secret" not in response.text

    async def test_deleted_sale_is_404(self, api_client, api_app):
        uc = AsyncMock(spec=DeleteSaleUseCase)
        uc.execute.side_effect = StockTransactionNotFoundError("sale", 3)
        api_app.dependency_overrides[get_delete_sale_use_case] = lambda: uc

        response = await api_client.delete("/api/sales/3")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SALE_NOT_FOUND"


class TestRequestValidation:
    async def test_schema_errors_are_422(self, api_client, purchase_use_case):
        response = await api_client.post(
            "/api/purchases", json={**PURCHASE, "purchase_items": []}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        purchase_use_case.execute.assert_not_awaited()


class TestTenantHeader:
    """Header resolution runs without the override."""

    @pytest.fixture
    async def raw_client(self):
        store = AsyncMock()
        store.get_client.side_effect = lambda client_id: (
            Client(id=client_id, name="Shop") if client_id == "known" else None
        )
        app.dependency_overrides[get_cli_store] = lambda: store
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
        app.dependency_overrides.clear()

    async def test_missing_header(self, raw_client):
        response = await raw_client.post("/api/purchases", json=PURCHASE)

        assert response.status_code == 400
        assert response.json()["detail"] == "field: X-Client-Id"

    async def test_unknown_tenant(self, raw_client):
        response = await raw_client.post(
            "/api/purchases", json=PURCHASE, headers={"X-Client-Id": "ghost"}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "CLIENT_NOT_FOUND"
