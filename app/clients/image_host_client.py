"""
Image hosting relay (Cloudinary).

Uploads raw image bytes and returns the hosted secure URL.
"""

import asyncio
import logging
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.config.settings import Settings, get_settings
from app.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class ImageUploadError(ExternalServiceError):
    def __init__(self, message: str = "Image upload failed", details=None):
        super().__init__(message, 500, details)


class ImageHostClient:
    """
    Thin wrapper around `cloudinary.uploader`.

    The SDK is synchronous, so uploads run in a worker thread.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        if self.settings.cloudinary_enabled:
            cloudinary.config(
                cloud_name=self.settings.CLOUDINARY_CLOUD_NAME,
                api_key=self.settings.CLOUDINARY_API_KEY,
                api_secret=self.settings.CLOUDINARY_API_SECRET,
                secure=True,
            )

    async def upload_image(self, content: bytes) -> str:
        """
        Upload an image and return its secure URL.

        Raises:
            ImageUploadError: When the host is not configured or the upload fails
        """
        if not self.settings.cloudinary_enabled:
            raise ImageUploadError(details="Image hosting is not configured")
        if len(content) > self.settings.MAX_FILE_SIZE:
            raise ImageUploadError(details="File is too large")

        options = {"resource_type": "image", "unique_filename": True, "overwrite": False}

        try:
            result = await asyncio.to_thread(cloudinary.uploader.upload, content, **options)
        except CloudinaryError as e:
            logger.error(f"Image upload failed: {e}")
            raise ImageUploadError(details=str(e)) from e

        url = result.get("secure_url") or result.get("url")
        if not url:
            raise ImageUploadError(details="No URL returned by image host")
        return url
