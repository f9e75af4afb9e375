"""
Clients for external APIs
"""

from .base import BaseAPIClient, GatewayError, GatewayReply
from .goshiip_client import GoshiipClient, GoshiipError
from .image_host_client import ImageHostClient, ImageUploadError
from .paystack_client import PaystackClient, PaystackError

__all__ = [
    "BaseAPIClient",
    "GatewayError",
    "GatewayReply",
    "GoshiipClient",
    "GoshiipError",
    "ImageHostClient",
    "ImageUploadError",
    "PaystackClient",
    "PaystackError",
]
