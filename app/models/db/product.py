"""
Product listing model
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, Float, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin, isoformat

if TYPE_CHECKING:
    from .user import UserDB

TAG_FOR_SALE = "For sale"
TAG_DONATE = "Donate"

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"


class Product(Base, TimestampMixin):
    """A listing uploaded by a user, either for sale or as a donation."""

    __tablename__ = "products"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(100), nullable=False)

    # Price fields are empty for donations
    price = Column(Float)
    price_category = Column(String(50))

    images = Column(ARRAY(String), default=list, nullable=False)
    primary_image = Column(String(500))
    video_url = Column(String(500))
    location = Column(String(255))
    specification = Column(Text)
    condition = Column(String(100))

    tag = Column(String(20), nullable=False, default=TAG_FOR_SALE)
    availability = Column(Boolean, default=True, nullable=False)
    status = Column(String(20), nullable=False, default=STATUS_PENDING)  # pending, approved, rejected

    uploader_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user: Mapped["UserDB"] = relationship("UserDB", back_populates="products")

    __table_args__ = (
        Index("idx_products_category", category),
        Index("idx_products_uploader", uploader_id),
        Index("idx_products_status", status),
    )

    def __repr__(self):
        return f"<Product(id='{self.id}', title='{self.title}', tag='{self.tag}', status='{self.status}')>"

    @property
    def is_donation(self) -> bool:
        return self.tag == TAG_DONATE

    def to_dict(self, include_user: bool = False) -> dict:
        data = {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "priceCategory": self.price_category,
            "images": list(self.images or []),
            "primaryImage": self.primary_image,
            "videoUrl": self.video_url,
            "location": self.location,
            "specification": self.specification,
            "condition": self.condition,
            "tag": self.tag,
            "availability": self.availability,
            "status": self.status,
            "uploader": str(self.uploader_id),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_user:
            data["user"] = self.user.to_summary() if self.user else None
        return data
