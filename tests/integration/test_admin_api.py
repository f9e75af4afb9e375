"""
Integration tests for the admin endpoints: login, dashboard, product
moderation and back-office notifications.
"""

import pytest

from app.api.dependencies import token_service
from tests.utils import assert_error, assert_ok, make_admin, make_admin_notification, make_product

pytestmark = pytest.mark.integration


class TestAdminAuth:
    def test_login(self, api_client, admin_repository):
        admin = make_admin(password_hash=token_service.get_password_hash("admin-pass"))
        admin_repository.get_by_email.return_value = admin

        response = api_client.post("/api/admin/login", json={"email": admin.email, "password": "admin-pass"})

        data = assert_ok(response, 200, "Login successful")
        assert token_service.decode_admin_token(data["token"]) == str(admin.id)

    def test_login_wrong_password(self, api_client, admin_repository):
        admin_repository.get_by_email.return_value = make_admin(password_hash=token_service.get_password_hash("x1y"))

        response = api_client.post("/api/admin/login", json={"email": "admin@example.com", "password": "nope"})

        assert_error(response, 401, "Invalid email or password")

    def test_dashboard(self, api_client, admin_auth_headers):
        response = api_client.get("/api/adminDashboard/dashboard", headers=admin_auth_headers)

        assert_ok(response, 200, "Welcome admin@example.com, this is your dashboard")

    def test_dashboard_without_token(self, api_client, admin_repository):
        response = api_client.get("/api/adminDashboard/dashboard")

        assert_error(response, 401, "Not authorized, no token")

    def test_user_token_is_not_an_admin_token(self, api_client, admin_repository):
        token = token_service.create_user_token("some-user")

        response = api_client.get("/api/adminDashboard/dashboard", headers={"Authorization": f"Bearer {token}"})

        assert_error(response, 401, "Not authorized, token failed")


class TestProductModeration:
    def test_routes_require_admin(self, api_client, admin_repository, product_repository):
        assert_error(api_client.get("/api/adminProduct"), 401)
        assert_error(api_client.put("/api/adminProduct/abc", data={"title": "x"}), 401)
        product_repository.list_all.assert_not_awaited()

    def test_list_all(self, api_client, current_admin, product_repository):
        product_repository.list_all.return_value = [make_product(), make_product()]

        data = assert_ok(api_client.get("/api/adminProduct"))

        assert len(data) == 2

    def test_delete(self, api_client, current_admin, product_repository):
        product = make_product()
        product_repository.get_by_id.return_value = product

        assert_ok(api_client.delete(f"/api/adminProduct/{product.id}"), 200, "Product deleted successfully")
        product_repository.delete.assert_awaited_once_with(product)

    def test_update_with_image(self, api_client, current_admin, product_repository, image_host):
        product = make_product()
        product_repository.get_by_id.return_value = product
        product_repository.update.side_effect = lambda entity, **fields: entity

        response = api_client.put(
            f"/api/adminProduct/{product.id}",
            data={"title": "Oak desk", "price": "30000"},
            files={"image": ("desk.jpg", b"\xff\xd8\xff", "image/jpeg")},
        )

        assert_ok(response, 200, "Product updated successfully")
        fields = product_repository.update.call_args.kwargs
        assert fields["title"] == "Oak desk"
        assert fields["price"] == 30000.0
        assert fields["primary_image"] == "https://images.test/uploaded.jpg"
        assert fields["images"][0] == "https://images.test/uploaded.jpg"
        assert fields["images"][1:] == ["https://images.test/1.jpg", "https://images.test/2.jpg"]

    def test_update_donation_ignores_price(self, api_client, current_admin, product_repository, image_host):
        product = make_product(tag="Donate", price=None)
        product_repository.get_by_id.return_value = product
        product_repository.update.side_effect = lambda entity, **fields: entity

        response = api_client.put(
            f"/api/adminProduct/{product.id}", data={"price": "500", "priceCategory": "Fixed", "location": "Yaba"}
        )

        assert_ok(response)
        assert product_repository.update.call_args.kwargs == {"location": "Yaba"}

    @pytest.mark.parametrize("new_status", ["approved", "rejected"])
    def test_update_status(self, api_client, current_admin, product_repository, new_status):
        product = make_product()
        product_repository.get_by_id.return_value = product
        product_repository.update.side_effect = lambda entity, **fields: make_product(**fields)

        response = api_client.put(f"/api/adminProduct/{product.id}/status", json={"status": new_status})

        data = assert_ok(response, 200, f"Product status updated to {new_status}")
        assert data["status"] == new_status

    def test_update_status_invalid(self, api_client, current_admin, product_repository):
        response = api_client.put("/api/adminProduct/abc/status", json={"status": "pending"})

        assert_error(response, 400, "Invalid status value")
        product_repository.get_by_id.assert_not_awaited()


class TestAdminNotifications:
    def test_list(self, api_client, current_admin, admin_notification_repository):
        admin_notification_repository.list_all.return_value = [make_admin_notification()]

        data = assert_ok(api_client.get("/api/notifyAdmin/notifications"))

        assert data[0]["type"] == "product_pending"

    def test_mark_all_read(self, api_client, current_admin, admin_notification_repository):
        assert_ok(api_client.patch("/api/notifyAdmin/notifications/mark-all-read"))
        admin_notification_repository.mark_all_read.assert_awaited_once()

    def test_mark_one_read_missing(self, api_client, current_admin, admin_notification_repository):
        admin_notification_repository.get_by_id.return_value = None

        response = api_client.patch("/api/notifyAdmin/notifications/abc/mark-read")

        assert_error(response, 404, "Notification not found")

    def test_requires_admin(self, api_client, admin_repository, admin_notification_repository):
        assert_error(api_client.get("/api/notifyAdmin/notifications"), 401)
