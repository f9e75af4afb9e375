"""
Integration tests for /api/orders endpoints.
"""

import pytest

from tests.utils import assert_error, assert_ok, make_order, make_product

pytestmark = pytest.mark.integration


@pytest.fixture
def order_factory(order_repository):
    order_repository.create.side_effect = lambda **fields: make_order(**fields)
    return order_repository


class TestCreateOrder:
    def test_amount_defaults_to_price(self, api_client, current_user, order_factory, product_repository):
        product = make_product()
        product_repository.get_by_id.return_value = product

        response = api_client.post("/api/orders", json={"productId": str(product.id)})

        data = assert_ok(response, 201, "Order created successfully")
        assert data["amount"] == 25000.0
        assert data["status"] == "pending"
        order_factory.create.assert_awaited_once_with(user_id=current_user.id, product_id=product.id, amount=25000.0)

    def test_explicit_amount(self, api_client, current_user, order_factory, product_repository):
        product_repository.get_by_id.return_value = make_product()

        data = assert_ok(api_client.post("/api/orders", json={"productId": "p1", "amount": 18000}), 201)

        assert data["amount"] == 18000.0

    def test_unknown_product(self, api_client, current_user, order_factory, product_repository):
        product_repository.get_by_id.return_value = None

        assert_error(api_client.post("/api/orders", json={"productId": "p1"}), 404, "Product not found")

    def test_donation_needs_amount(self, api_client, current_user, order_factory, product_repository):
        product_repository.get_by_id.return_value = make_product(tag="Donate", price=None)

        response = api_client.post("/api/orders", json={"productId": "p1"})

        assert_error(response, 400, "Amount is required for this product")
        order_factory.create.assert_not_awaited()

    def test_requires_product_id(self, api_client, current_user, order_factory, product_repository):
        assert_error(api_client.post("/api/orders", json={}), 400, "Product ID is required")


def test_list_user_orders(api_client, order_repository):
    order = make_order()
    order_repository.list_by_user.return_value = [order]

    data = assert_ok(api_client.get(f"/api/orders/user/{order.user_id}"), 200, "Orders fetched successfully")

    assert data[0]["id"] == str(order.id)
    assert data[0]["user"] is None
    order_repository.list_by_user.assert_awaited_once_with(str(order.user_id))
