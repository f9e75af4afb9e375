"""
Order model
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Column, Float, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin, isoformat

if TYPE_CHECKING:
    from .product import Product
    from .user import UserDB


class OrderStatus:
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(Base, TimestampMixin):
    """Purchase of a single product, linked to its payment and shipment."""

    __tablename__ = "orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    product_id = Column(UUID(as_uuid=True), ForeignKey("products.id", ondelete="SET NULL"))

    amount = Column(Float, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING)

    # Payment gateway and logistics references
    transaction_reference = Column(String(100), index=True)
    shipment_reference = Column(String(100), index=True)

    user: Mapped["UserDB"] = relationship("UserDB", back_populates="orders")
    product: Mapped["Product"] = relationship("Product")

    __table_args__ = (
        Index("idx_orders_user", user_id),
        Index("idx_orders_status", status),
        Index("idx_orders_user_created", user_id, "created_at"),
    )

    def __repr__(self):
        return f"<Order(id='{self.id}', status='{self.status}', amount={self.amount})>"

    def to_dict(self, include_relations: bool = False) -> dict:
        data = {
            "id": str(self.id),
            "userId": str(self.user_id),
            "productId": str(self.product_id) if self.product_id else None,
            "amount": self.amount,
            "status": self.status,
            "transactionReference": self.transaction_reference,
            "shipmentReference": self.shipment_reference,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_relations:
            user = self.user
            data["user"] = (
                {"username": user.username, "email": user.email, "phoneNumber": user.phone_number}
                if user
                else None
            )
            data["product"] = self.product.to_dict() if self.product else None
        return data
