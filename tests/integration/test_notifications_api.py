"""
Integration tests for /api/notify endpoints.
"""

import pytest

from tests.utils import assert_error, assert_ok, make_notification, make_user

pytestmark = pytest.mark.integration


def test_list_for_current_user(api_client, current_user, notification_repository):
    notification_repository.list_for_user.return_value = [make_notification(current_user.id)]

    data = assert_ok(api_client.get("/api/notify/notifications"))

    assert data[0]["userId"] == str(current_user.id)
    notification_repository.list_for_user.assert_awaited_once_with(current_user.id)


def test_list_requires_token(api_client, user_repository, notification_repository):
    assert_error(api_client.get("/api/notify/notifications"), 401, "Not authorized, no token")


def test_mark_all_read(api_client, current_user, notification_repository):
    response = api_client.patch("/api/notify/notifications/mark-read")

    assert_ok(response, 200, "All notifications marked as read")
    notification_repository.mark_all_read.assert_awaited_once_with(current_user.id)


class TestCreateNotification:
    def test_creates(self, api_client, user_repository, notification_repository):
        user = make_user()
        user_repository.get_by_id.return_value = user
        notification_repository.create.return_value = make_notification(user.id, message="Your order shipped")

        response = api_client.post(
            "/api/notify/notifications", json={"userId": str(user.id), "message": "Your order shipped"}
        )

        data = assert_ok(response, 201, "Notification created")
        assert data["message"] == "Your order shipped"
        notification_repository.create.assert_awaited_once_with(str(user.id), "Your order shipped")

    def test_requires_message_and_user(self, api_client, user_repository, notification_repository):
        response = api_client.post("/api/notify/notifications", json={"message": "hello"})

        assert_error(response, 400, "Message and userId are required")

    def test_unknown_user(self, api_client, user_repository, notification_repository):
        user_repository.get_by_id.return_value = None

        response = api_client.post("/api/notify/notifications", json={"userId": "ghost", "message": "hello"})

        assert_error(response, 404, "User not found")
        notification_repository.create.assert_not_awaited()


class TestMarkOneRead:
    def test_marks_read(self, api_client, current_user, notification_repository):
        notification = make_notification(current_user.id)
        notification_repository.get_for_user.return_value = notification
        notification_repository.update.return_value = make_notification(current_user.id, read=True)

        response = api_client.patch(f"/api/notify/notifications/{notification.id}/mark-read")

        data = assert_ok(response, 200, "Notification marked as read")
        assert data["read"] is True
        notification_repository.update.assert_awaited_once_with(notification, read=True)

    def test_other_users_notification_is_not_found(self, api_client, current_user, notification_repository):
        notification_repository.get_for_user.return_value = None

        response = api_client.patch("/api/notify/notifications/abc/mark-read")

        assert_error(response, 404, "Notification not found")
        notification_repository.get_for_user.assert_awaited_once_with("abc", current_user.id)
