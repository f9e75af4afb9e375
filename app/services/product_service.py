"""
Product listing rules.

Validates new listings (sale and donation), persists them and notifies the
uploader and the back office.
"""

import logging
from typing import Any, Optional

from app.api.schemas.products import ProductCreateRequest
from app.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.models.db.notification import ADMIN_PRODUCT_PENDING
from app.models.db.product import STATUS_PENDING, TAG_DONATE, TAG_FOR_SALE, Product
from app.repositories.notification_repository import AdminNotificationRepository, NotificationRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

MAX_IMAGES = 10
IMAGE_SEPARATOR = ", "
VIDEO_REQUIRED_CATEGORIES = ("Accessories", "Household-Items", "Electronics")
REVIEW_MESSAGE = "Your product would undergo review."

_COMMON_REQUIRED = ("title", "description", "category", "location", "specification", "condition")
_SALE_REQUIRED = ("price", "price_category")


def split_images(images: Optional[str]) -> list[str]:
    if not images:
        return []
    return [url.strip() for url in images.split(IMAGE_SEPARATOR) if url.strip()]


class ProductService:
    """
    Creates listings.

    Args:
        product_repository: Product persistence
        user_repository: Uploader lookup
        notification_repository: Uploader notifications
        admin_notification_repository: Back-office notifications
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        admin_notification_repository: AdminNotificationRepository,
    ):
        self.product_repository = product_repository
        self.user_repository = user_repository
        self.notification_repository = notification_repository
        self.admin_notification_repository = admin_notification_repository

    async def create_listing(self, request: ProductCreateRequest, donation: bool = False) -> Product:
        """
        Validate and store a new listing with status "pending".

        Raises:
            BadRequestError: Missing fields, bad images or missing video
            NotFoundError: Unknown uploader
            ForbiddenError: Uploader profile incomplete or bank details unverified
        """
        images = self._validate(request, donation)

        user = await self.user_repository.get_by_id(request.uploader)
        if user is None:
            raise NotFoundError("Uploader not found")
        if not user.has_complete_profile:
            raise ForbiddenError("Please complete your profile info before uploading a product.")
        if not user.is_verified:
            raise ForbiddenError("Verify your bank details first.")

        fields: dict[str, Any] = {
            "title": request.title,
            "description": request.description,
            "category": request.category,
            "images": images,
            "primary_image": images[request.primary_image_index],
            "video_url": request.video or "",
            "location": request.location,
            "specification": request.specification,
            "condition": request.condition,
            "tag": TAG_DONATE if donation else TAG_FOR_SALE,
            "availability": True,
            "status": STATUS_PENDING,
            "uploader_id": user.id,
        }
        if not donation:
            fields["price"] = float(request.price)
            fields["price_category"] = request.price_category

        product = await self.product_repository.create(**fields)

        await self.notification_repository.create(user.id, REVIEW_MESSAGE)
        await self.admin_notification_repository.create(
            ADMIN_PRODUCT_PENDING,
            f'A new product "{product.title}" is pending approval.',
            product.id,
        )
        logger.info(f"Listing {product.id} submitted for review by {user.username}")
        return product

    @staticmethod
    def _validate(request: ProductCreateRequest, donation: bool) -> list[str]:
        required = _COMMON_REQUIRED if donation else _COMMON_REQUIRED + _SALE_REQUIRED
        if any(getattr(request, name) in (None, "") for name in required):
            raise BadRequestError("Please fill all required fields")

        images = split_images(request.images)
        if not images:
            raise BadRequestError("Please upload at least one product image")
        if len(images) > MAX_IMAGES:
            raise BadRequestError(f"You can upload a maximum of {MAX_IMAGES} images")

        if request.primary_image_index is None:
            raise BadRequestError("Please select a primary image for display")
        if not 0 <= request.primary_image_index < len(images):
            raise BadRequestError("Primary image index is out of range")

        if request.category in VIDEO_REQUIRED_CATEGORIES and not request.video:
            raise BadRequestError("Please upload a video for this category")

        if not request.uploader:
            raise BadRequestError("Uploader is required")
        return images
