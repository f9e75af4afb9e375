"""
Unit tests for the Cloudinary upload relay.
"""

from unittest.mock import patch

import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError

from app.clients.image_host_client import ImageHostClient, ImageUploadError
from app.config.settings import Settings

pytestmark = pytest.mark.unit

CLOUDINARY = {"CLOUDINARY_CLOUD_NAME": "shop", "CLOUDINARY_API_KEY": "key", "CLOUDINARY_API_SECRET": "secret"}


@pytest.fixture
def client():
    with patch("app.clients.image_host_client.cloudinary.config"):
        yield ImageHostClient(Settings(_env_file=None, **CLOUDINARY))


async def test_upload_returns_secure_url(client):
    with patch.object(cloudinary.uploader, "upload", return_value={"secure_url": "https://cdn.test/a.jpg"}) as upload:
        url = await client.upload_image(b"\xff\xd8\xff")

    assert url == "https://cdn.test/a.jpg"
    upload.assert_called_once_with(b"\xff\xd8\xff", resource_type="image", unique_filename=True, overwrite=False)


async def test_upload_failure(client):
    with patch.object(cloudinary.uploader, "upload", side_effect=CloudinaryError("quota exceeded")):
        with pytest.raises(ImageUploadError) as exc_info:
            await client.upload_image(b"\xff\xd8\xff")

    assert exc_info.value.status_code == 500
    assert exc_info.value.details == "quota exceeded"


async def test_not_configured():
    client = ImageHostClient(Settings(_env_file=None))

    with pytest.raises(ImageUploadError) as exc_info:
        await client.upload_image(b"\xff\xd8\xff")

    assert exc_info.value.details == "Image hosting is not configured"


async def test_rejects_large_files(client):
    client.settings.MAX_FILE_SIZE = 2

    with pytest.raises(ImageUploadError) as exc_info:
        await client.upload_image(b"\xff\xd8\xff")

    assert exc_info.value.details == "File is too large"
