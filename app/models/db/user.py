"""
Marketplace account models
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin, isoformat

if TYPE_CHECKING:
    from .notification import Notification
    from .orders import Order
    from .product import Product

# Fields a seller must fill in before listing a product
PROFILE_REQUIRED_FIELDS = (
    "full_name",
    "username",
    "email",
    "city",
    "state",
    "country",
    "bio",
    "phone_number",
)


class UserDB(Base, TimestampMixin):
    """
    Marketplace user (buyer and seller).

    Attributes:
        email: Unique login email
        password_hash: bcrypt hash of the password
        account_name, bank_name, account_number: Payout bank details
        is_verified: True once all bank details are present
        reset_password_token, reset_password_expires: Pending password reset
    """

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    full_name = Column(String(255), nullable=False)
    username = Column(String(100), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Profile
    bio = Column(Text)
    profile_picture = Column(String(500))
    phone_number = Column(String(20))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    country = Column(String(100))

    # Bank details
    account_name = Column(String(255))
    bank_name = Column(String(255))
    account_number = Column(String(20))
    is_verified = Column(Boolean, default=False, nullable=False)

    # Password reset
    reset_password_token = Column(String(64), index=True)
    reset_password_expires = Column(DateTime(timezone=True))

    products: Mapped[List["Product"]] = relationship("Product", back_populates="user")
    orders: Mapped[List["Order"]] = relationship("Order", back_populates="user")
    notifications: Mapped[List["Notification"]] = relationship(
        "Notification", back_populates="user", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_users_email", email),
        Index("idx_users_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<UserDB(id='{self.id}', username='{self.username}', email='{self.email}')>"

    @property
    def has_complete_profile(self) -> bool:
        return all(getattr(self, field) for field in PROFILE_REQUIRED_FIELDS)

    @property
    def has_bank_details(self) -> bool:
        return bool(self.account_name and self.bank_name and self.account_number)

    def to_dict(self) -> dict:
        """Public representation (never includes the password hash or reset token)."""
        return {
            "id": str(self.id),
            "fullName": self.full_name,
            "username": self.username,
            "email": self.email,
            "bio": self.bio,
            "profilePicture": self.profile_picture,
            "phoneNumber": self.phone_number,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "accountName": self.account_name,
            "bankName": self.bank_name,
            "accountNumber": self.account_number,
            "isVerified": self.is_verified,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def to_summary(self) -> dict:
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "profilePicture": self.profile_picture,
        }


class AdminDB(Base, TimestampMixin):
    """Back-office administrator."""

    __tablename__ = "admins"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<AdminDB(id='{self.id}', email='{self.email}')>"

    def to_dict(self) -> dict:
        return {"id": str(self.id), "email": self.email}
