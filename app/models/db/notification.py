"""
User and admin notification models
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin, isoformat

if TYPE_CHECKING:
    from .user import UserDB

ADMIN_PRODUCT_PENDING = "product_pending"


class Notification(Base, TimestampMixin):
    """Message shown to a single user."""

    __tablename__ = "notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)

    user: Mapped["UserDB"] = relationship("UserDB", back_populates="notifications")

    __table_args__ = (Index("idx_notifications_user_read", user_id, read),)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "message": self.message,
            "read": self.read,
            "createdAt": isoformat(self.created_at),
        }


class AdminNotification(Base, TimestampMixin):
    """Message for the back office, e.g. a product awaiting review."""

    __tablename__ = "admin_notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    product_id = Column(UUID(as_uuid=True), ForeignKey("products.id", ondelete="SET NULL"))
    read = Column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("idx_admin_notifications_read", read),)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "type": self.type,
            "message": self.message,
            "productId": str(self.product_id) if self.product_id else None,
            "read": self.read,
            "createdAt": isoformat(self.created_at),
        }
