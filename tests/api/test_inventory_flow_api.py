"""HTTP flow against a migrated database, tenant header included."""

import pytest
from httpx import ASGITransport, AsyncClient

from inventory_pos.api.main import app


@pytest.fixture
async def http(migrated_db):
    app.dependency_overrides.clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def tenant(http: AsyncClient) -> dict:
    """Tenant with a supplier, a customer and a size variant."""
    response = await http.post("/api/clients", json={"name": "Corner Shop"})
    assert response.status_code == 201
    headers = {"X-Client-Id": response.json()["id"]}

    supplier = await http.post("/api/suppliers", json={"name": "Paper Co"}, headers=headers)
    customer = await http.post("/api/customers", json={"name": "Ana"}, headers=headers)
    variant = await http.post(
        "/api/variants", json={"name": "Size", "options": ["S", "M"]}, headers=headers
    )
    assert variant.status_code == 201
    return {
        "headers": headers,
        "supplier_id": supplier.json()["id"],
        "customer_id": customer.json()["id"],
        "options": [o["id"] for o in variant.json()["options"]],
        "variant_id": variant.json()["id"],
    }


class TestInventoryFlow:
    async def test_purchase_sale_and_reversal(self, http: AsyncClient, tenant: dict):
        headers = tenant["headers"]
        small, medium = tenant["options"]

        created = await http.post(
            "/api/products/with-variants",
            json={
                "product": {"name": "T-Shirt", "base_cost": 4.0, "price": 12.0},
                "items_variants": [
                    {"option_combination": [small], "stock": {"initial_quantity": 10}},
                ],
            },
            headers=headers,
        )
        assert created.status_code == 201
        product = created.json()
        stocks = {tuple(s["option_combination"]): s for s in product["stocks"]}
        assert stocks[(medium,)]["status"] == "inactive"
        small_stock = stocks[(small,)]["id"]

        purchase = await http.post(
            "/api/purchases",
            json={
                "supplier_id": tenant["supplier_id"],
                "currency": "USD",
                "purchase_items": [
                    {"product_stock_id": small_stock, "quantity": 10, "amount": 6.0}
                ],
            },
            headers=headers,
        )
        assert purchase.status_code == 201
        assert purchase.json()["total"] == 60.0

        after_purchase = (await http.get(f"/api/products/{product['id']}", headers=headers)).json()
        assert after_purchase["average_cost"] == 5.0
        assert after_purchase["total_for_average_cost"] == 20

        sale = await http.post(
            "/api/sales",
            json={
                "customer_id": tenant["customer_id"],
                "currency": "USD",
                "sale_items": [{"product_stock_id": small_stock, "quantity": 3}],
            },
            headers=headers,
        )
        assert sale.status_code == 201
        assert sale.json()["total"] == 36.0

        deleted = await http.delete(f"/api/purchases/{purchase.json()['id']}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json()["is_active"] is False

        final = (await http.get(f"/api/products/{product['id']}", headers=headers)).json()
        assert final["average_cost"] == 4.0
        assert final["total_for_average_cost"] == 10
        assert {s["id"]: s["quantity"] for s in final["stocks"]}[small_stock] == 7

        listed = await http.get("/api/purchases", headers=headers)
        assert listed.json()["transactions"] == []
        kept = await http.get(f"/api/purchases/{purchase.json()['id']}", headers=headers)
        assert kept.json()["is_active"] is False

    async def test_sale_on_inactive_stock_is_400(self, http: AsyncClient, tenant: dict):
        headers = tenant["headers"]
        small, medium = tenant["options"]
        created = await http.post(
            "/api/products/with-variants",
            json={
                "product": {"name": "Cap", "base_cost": 2.0, "price": 5.0},
                "items_variants": [
                    {"option_combination": [small], "stock": {"initial_quantity": 1}},
                ],
            },
            headers=headers,
        )
        inactive = next(
            s["id"] for s in created.json()["stocks"] if s["option_combination"] == [medium]
        )

        response = await http.post(
            "/api/sales",
            json={
                "customer_id": tenant["customer_id"],
                "currency": "USD",
                "sale_items": [{"product_stock_id": inactive, "quantity": 1}],
            },
            headers=headers,
        )

        assert response.status_code == 400
        assert "inactive" in response.json()["message"]

    async def test_locked_variant_cannot_be_deleted(self, http: AsyncClient, tenant: dict):
        headers = tenant["headers"]
        await http.post(
            "/api/products/with-variants",
            json={
                "product": {"name": "Sock", "base_cost": 1.0, "price": 3.0},
                "items_variants": [
                    {"option_combination": [tenant["options"][0]], "stock": {"initial_quantity": 1}},
                ],
            },
            headers=headers,
        )

        response = await http.delete(f"/api/variants/{tenant['variant_id']}", headers=headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VARIANT_LOCKED"

    async def test_other_tenant_sees_nothing(self, http: AsyncClient, tenant: dict):
        other = (await http.post("/api/clients", json={"name": "Rival"})).json()["id"]

        response = await http.get(
            f"/api/variants/{tenant['variant_id']}", headers={"X-Client-Id": other}
        )

        assert response.status_code == 404

    async def test_manual_adjustment(self, http: AsyncClient, tenant: dict):
        headers = tenant["headers"]
        created = await http.post(
            "/api/products/unique",
            json={
                "product": {"name": "Pen", "base_cost": 1.0, "price": 2.0},
                "stock": {"initial_quantity": 5},
            },
            headers=headers,
        )
        stock_id = created.json()["stocks"][0]["id"]

        response = await http.post(
            "/api/inventory/adjustments",
            json={
                "product_stock_id": stock_id,
                "adjustment_type": "decrement",
                "quantity": 2,
                "comment": "Damaged in store",
            },
            headers=headers,
        )

        assert response.status_code == 201
        assert response.json()["stock"]["quantity"] == 3
        stock = await http.get(f"/api/inventory/stocks/{stock_id}", headers=headers)
        assert stock.json()["quantity"] == 3
