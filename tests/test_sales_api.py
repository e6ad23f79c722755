"""Tests for the sales HTTP endpoints."""
from decimal import Decimal

from app.shared.database.models import Product


def test_create_sale_returns_full_sale(client, auth_headers, user, customer, make_product, make_discount):
    product = make_product(price="100.00", stock=20, name="Zapatilla Runner")
    make_discount(code="SAVE10", value="10")

    response = client.post("/api/v1/sales", json={
        "customer_id": customer.id,
        "items": [{"product_id": product.id, "quantity": 2}],
        "discount_code": "SAVE10"
    }, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert Decimal(body["subtotal"]) == Decimal("200.00")
    assert Decimal(body["discount_amount"]) == Decimal("20.00")
    assert Decimal(body["total"]) == Decimal("180.00")
    assert body["user"]["id"] == user.id
    assert body["customer"]["name"] == customer.name
    assert body["items"][0]["product"]["name"] == "Zapatilla Runner"
    assert Decimal(body["items"][0]["unit_price"]) == Decimal("100.00")


def test_create_sale_insufficient_stock(client, auth_headers, make_product):
    product = make_product(stock=1)

    response = client.post("/api/v1/sales", json={
        "items": [{"product_id": product.id, "quantity": 2}]
    }, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["reason"] == "insufficient_stock"


def test_create_sale_unknown_product(client, auth_headers):
    response = client.post("/api/v1/sales", json={
        "items": [{"product_id": 12345, "quantity": 1}]
    }, headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["reason"] == "product_not_found"


def test_create_sale_invalid_payload(client, auth_headers, make_product):
    product = make_product(stock=10)

    for payload in (
        {"items": []},
        {"items": [{"product_id": product.id, "quantity": 0}]},
        {"items": [{"product_id": product.id}]},
    ):
        response = client.post("/api/v1/sales", json=payload, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["reason"] == "validation_error"


def test_create_sale_invalid_discount_code(client, auth_headers, make_product):
    product = make_product(stock=10)

    response = client.post("/api/v1/sales", json={
        "items": [{"product_id": product.id, "quantity": 1}],
        "discount_code": "GHOST"
    }, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["reason"] == "discount_not_found"


def test_unknown_user_is_unauthorized(client, make_product):
    product = make_product(stock=10)

    response = client.post("/api/v1/sales", json={
        "items": [{"product_id": product.id, "quantity": 1}]
    }, headers={"X-User-Id": "999"})

    assert response.status_code == 401
    assert response.json()["reason"] == "unauthorized"


def test_get_list_and_delete_sale(client, auth_headers, db, make_product):
    product = make_product(price="10.00", stock=10)

    created = client.post("/api/v1/sales", json={
        "items": [{"product_id": product.id, "quantity": 3}]
    }, headers=auth_headers).json()

    response = client.get(f"/api/v1/sales/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["items"][0]["quantity"] == 3

    response = client.get("/api/v1/sales", headers=auth_headers)
    assert [sale["id"] for sale in response.json()] == [created["id"]]

    response = client.delete(f"/api/v1/sales/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert "message" in response.json()

    db.expire_all()
    assert db.query(Product).filter(Product.id == product.id).one().stock == 10

    response = client.delete(f"/api/v1/sales/{created['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["reason"] == "sale_not_found"


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
