"""
Repositories for user and admin notifications
"""

from typing import Any, Optional

from sqlalchemy import select, update

from app.models.db.notification import AdminNotification, Notification
from app.repositories.base import BaseRepository, parse_uuid


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    async def create(self, user_id: Any, message: str) -> Notification:
        return await self.add(Notification(user_id=parse_uuid(user_id), message=message, read=False))

    async def list_for_user(self, user_id: Any) -> list[Notification]:
        result = await self.session.execute(
            select(Notification)
            .where(Notification.user_id == parse_uuid(user_id))
            .order_by(Notification.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_for_user(self, notification_id: Any, user_id: Any) -> Optional[Notification]:
        notification = await self.get_by_id(notification_id)
        if notification is None or notification.user_id != parse_uuid(user_id):
            return None
        return notification

    async def mark_all_read(self, user_id: Any) -> None:
        await self.session.execute(
            update(Notification)
            .where(Notification.user_id == parse_uuid(user_id), Notification.read.is_(False))
            .values(read=True)
        )
        await self._commit()


class AdminNotificationRepository(BaseRepository[AdminNotification]):
    model = AdminNotification

    async def create(self, type: str, message: str, product_id: Any = None) -> AdminNotification:
        return await self.add(
            AdminNotification(type=type, message=message, product_id=parse_uuid(product_id), read=False)
        )

    async def list_all(self) -> list[AdminNotification]:
        result = await self.session.execute(select(AdminNotification).order_by(AdminNotification.created_at.desc()))
        return list(result.scalars().all())

    async def mark_all_read(self) -> None:
        await self.session.execute(
            update(AdminNotification).where(AdminNotification.read.is_(False)).values(read=True)
        )
        await self._commit()
