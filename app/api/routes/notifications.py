"""
User and admin notification endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import (
    get_admin_notification_repository,
    get_current_admin,
    get_current_user,
    get_notification_repository,
    get_user_repository,
)
from app.api.responses import api_response
from app.api.schemas.notifications import NotificationCreateRequest
from app.core.exceptions import NotFoundError
from app.models.db.user import UserDB
from app.repositories.notification_repository import AdminNotificationRepository, NotificationRepository
from app.repositories.user_repository import UserRepository

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/notifications")
async def list_notifications(
    user: UserDB = Depends(get_current_user),  # noqa: B008
    notifications: NotificationRepository = Depends(get_notification_repository),  # noqa: B008
):
    items = await notifications.list_for_user(user.id)
    return api_response("Notifications retrieved successfully", [n.to_dict() for n in items])


@router.patch("/notifications/mark-read")
async def mark_all_read(
    user: UserDB = Depends(get_current_user),  # noqa: B008
    notifications: NotificationRepository = Depends(get_notification_repository),  # noqa: B008
):
    await notifications.mark_all_read(user.id)
    return api_response("All notifications marked as read")


@router.post("/notifications", status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: NotificationCreateRequest,
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
    notifications: NotificationRepository = Depends(get_notification_repository),  # noqa: B008
):
    if await users.get_by_id(request.user_id) is None:
        raise NotFoundError("User not found")

    notification = await notifications.create(request.user_id, request.message)
    return api_response("Notification created", notification.to_dict(), status.HTTP_201_CREATED)


@router.patch("/notifications/{notification_id}/mark-read")
async def mark_read(
    notification_id: str,
    user: UserDB = Depends(get_current_user),  # noqa: B008
    notifications: NotificationRepository = Depends(get_notification_repository),  # noqa: B008
):
    notification = await notifications.get_for_user(notification_id, user.id)
    if notification is None:
        raise NotFoundError("Notification not found")

    updated = await notifications.update(notification, read=True)
    return api_response("Notification marked as read", updated.to_dict())


@admin_router.get("/notifications")
async def list_admin_notifications(
    notifications: AdminNotificationRepository = Depends(get_admin_notification_repository),  # noqa: B008
):
    items = await notifications.list_all()
    return api_response("Notifications fetched successfully", [n.to_dict() for n in items])


@admin_router.patch("/notifications/mark-all-read")
async def mark_all_admin_read(
    notifications: AdminNotificationRepository = Depends(get_admin_notification_repository),  # noqa: B008
):
    await notifications.mark_all_read()
    return api_response("All notifications marked as read")


@admin_router.patch("/notifications/{notification_id}/mark-read")
async def mark_admin_read(
    notification_id: str,
    notifications: AdminNotificationRepository = Depends(get_admin_notification_repository),  # noqa: B008
):
    notification = await notifications.get_by_id(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")

    updated = await notifications.update(notification, read=True)
    return api_response("Notification marked as read", updated.to_dict())
