# tests/routers/test_carts.py
"""
Cart routes.

TestMarshaling swaps the service for a mock to check argument passing and
error mapping; TestCartFlow runs the real service on the in-memory store.
"""
from datetime import datetime, timezone
from unittest.mock import ANY, create_autospec

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from storefront.core.errors import (
    InsufficientInventoryError,
    ItemNotFoundError,
)
from storefront.main import app
from storefront.models.cart import Cart, CartItem
from storefront.routers.carts import get_cart_service
from storefront.schemas.cart import CartItemsResponse, CartSummary
from storefront.services.cart_service import CartService


@pytest.fixture
def cart_service(client: TestClient):
    mock = create_autospec(CartService, instance=True)
    app.dependency_overrides[get_cart_service] = lambda: mock
    return mock


class TestMarshaling:
    def test_create_cart(self, client, cart_service):
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        cart_service.create_cart.return_value = Cart(
            id=7, user_id="user1", created_at=created_at
        )

        response = client.post("/api/carts/user1")

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 7
        assert body["userId"] == "user1"
        cart_service.create_cart.assert_called_once_with(ANY, "user1")

    def test_create_cart_error(self, client, cart_service):
        cart_service.create_cart.side_effect = RuntimeError("Error al crear el carrito")

        response = client.post("/api/carts/user1")

        assert response.status_code == 400
        assert response.json() == {"error": "Error al crear el carrito"}

    def test_add_item(self, client, cart_service):
        cart_service.add_item_to_cart.return_value = CartItem(
            id=1, cart_id=3, product_id=5, quantity=2
        )

        response = client.post("/api/carts/3/items", json={"productId": 5, "quantity": 2})

        assert response.status_code == 201
        assert response.json() == {"id": 1, "cartId": 3, "productId": 5, "quantity": 2}
        cart_service.add_item_to_cart.assert_called_once_with(ANY, 3, 5, 2)

    def test_add_item_error(self, client, cart_service):
        cart_service.add_item_to_cart.side_effect = InsufficientInventoryError()

        response = client.post("/api/carts/3/items", json={"productId": 5, "quantity": 2})

        assert response.status_code == 400
        assert response.json() == {"error": "Not enough inventory available"}

    def test_add_item_store_failure(self, client, cart_service):
        failure = OperationalError("INSERT", {}, Exception("down"))
        cart_service.add_item_to_cart.side_effect = failure

        response = client.post("/api/carts/3/items", json={"productId": 5, "quantity": 2})

        assert response.status_code == 400
        assert response.json() == {"error": str(failure)}

    @pytest.mark.parametrize(
        "body",
        [
            {"productId": 5, "quantity": 0},
            {"productId": 5},
            {"quantity": 1},
        ],
    )
    def test_add_item_invalid_body(self, client, cart_service, body):
        response = client.post("/api/carts/3/items", json=body)

        assert response.status_code == 400
        assert "error" in response.json()
        cart_service.add_item_to_cart.assert_not_called()

    def test_non_numeric_cart_id(self, client, cart_service):
        response = client.get("/api/carts/cart123/items")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_list_items(self, client, cart_service):
        cart_service.get_cart_items.return_value = CartItemsResponse(
            items=[], summary=CartSummary()
        )

        response = client.get("/api/carts/3/items")

        assert response.status_code == 200
        assert response.json() == {
            "items": [],
            "summary": {"subtotal": 0.0, "totalTax": 0.0, "total": 0.0},
        }
        cart_service.get_cart_items.assert_called_once_with(ANY, 3)

    def test_list_items_error(self, client, cart_service):
        cart_service.get_cart_items.side_effect = RuntimeError("Error al obtener los artículos")

        response = client.get("/api/carts/3/items")

        assert response.status_code == 400
        assert response.json() == {"error": "Error al obtener los artículos"}

    def test_update_item(self, client, cart_service):
        cart_service.update_cart_item.return_value = CartItem(
            id=9, cart_id=3, product_id=5, quantity=3
        )

        response = client.put("/api/carts/3/items/9", json={"quantity": 3})

        assert response.status_code == 200
        assert response.json()["quantity"] == 3
        cart_service.update_cart_item.assert_called_once_with(ANY, 9, 3, cart_id=3)

    def test_update_item_error(self, client, cart_service):
        cart_service.update_cart_item.side_effect = ItemNotFoundError()

        response = client.put("/api/carts/3/items/9", json={"quantity": 3})

        assert response.status_code == 400
        assert response.json() == {"error": "Item not found"}

    def test_remove_item(self, client, cart_service):
        cart_service.remove_cart_item.return_value = None

        response = client.delete("/api/carts/3/items/9")

        assert response.status_code == 204
        assert response.content == b""
        cart_service.remove_cart_item.assert_called_once_with(ANY, 9, cart_id=3)

    def test_remove_item_error(self, client, cart_service):
        cart_service.remove_cart_item.side_effect = ItemNotFoundError()

        response = client.delete("/api/carts/3/items/9")

        assert response.status_code == 400
        assert response.json() == {"error": "Item not found"}


class TestCartFlow:
    def test_full_cart_lifecycle(self, client, make_product):
        headphones = make_product(name="Headphones", price=100, inventory=5, tax_rate=0.07)
        speaker = make_product(name="Speaker", price=200, inventory=2, tax_rate=0.07)

        cart = client.post("/api/carts/user42").json()
        cart_id = cart["id"]
        assert cart["userId"] == "user42"

        first = client.post(
            f"/api/carts/{cart_id}/items", json={"productId": headphones.id, "quantity": 1}
        )
        merged = client.post(
            f"/api/carts/{cart_id}/items", json={"productId": headphones.id, "quantity": 1}
        )
        client.post(f"/api/carts/{cart_id}/items", json={"productId": speaker.id, "quantity": 1})

        assert first.status_code == 201
        assert merged.json()["id"] == first.json()["id"]
        assert merged.json()["quantity"] == 2

        listing = client.get(f"/api/carts/{cart_id}/items").json()
        assert len(listing["items"]) == 2
        line = listing["items"][0]
        assert line["product"]["taxRate"] == 0.07
        assert line["itemSubtotal"] == pytest.approx(200)
        assert line["itemTax"] == pytest.approx(14)
        assert listing["summary"]["subtotal"] == pytest.approx(400)
        assert listing["summary"]["totalTax"] == pytest.approx(28)
        assert listing["summary"]["total"] == pytest.approx(428)

        item_id = line["id"]
        updated = client.put(f"/api/carts/{cart_id}/items/{item_id}", json={"quantity": 5})
        assert updated.status_code == 200
        assert updated.json()["quantity"] == 5

        too_many = client.put(f"/api/carts/{cart_id}/items/{item_id}", json={"quantity": 6})
        assert too_many.status_code == 400
        assert too_many.json() == {"error": "Not enough inventory available"}

        assert client.delete(f"/api/carts/{cart_id}/items/{item_id}").status_code == 204
        again = client.delete(f"/api/carts/{cart_id}/items/{item_id}")
        assert again.status_code == 400
        assert again.json() == {"error": "Item not found"}

    def test_listing_includes_product_category(self, client, cart, make_product):
        product = make_product(name="Headphones")
        client.post(f"/api/carts/{cart.id}/items", json={"productId": product.id, "quantity": 1})

        listing = client.get(f"/api/carts/{cart.id}/items").json()

        assert listing["items"][0]["product"]["category"]["name"] == "Electronics"

    def test_item_of_another_cart_is_not_found(self, client, cart, make_product):
        product = make_product()
        item = client.post(
            f"/api/carts/{cart.id}/items", json={"productId": product.id, "quantity": 1}
        ).json()
        other_cart = client.post("/api/carts/user2").json()

        updated = client.put(
            f"/api/carts/{other_cart['id']}/items/{item['id']}", json={"quantity": 2}
        )
        removed = client.delete(f"/api/carts/{other_cart['id']}/items/{item['id']}")

        assert updated.status_code == 400
        assert updated.json() == {"error": "Item not found"}
        assert removed.status_code == 400
        assert removed.json() == {"error": "Item not found"}
        listing = client.get(f"/api/carts/{cart.id}/items").json()
        assert listing["items"][0]["quantity"] == 1

    def test_add_unknown_product(self, client, cart):
        response = client.post(f"/api/carts/{cart.id}/items", json={"productId": 999, "quantity": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "Product not found"}

    def test_add_more_than_inventory(self, client, cart, make_product):
        product = make_product(inventory=1)

        response = client.post(
            f"/api/carts/{cart.id}/items", json={"productId": product.id, "quantity": 2}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Not enough inventory available"}
