"""
GoShiip platform account id used when booking shipments.
"""

import logging
from typing import Optional

from app.clients.goshiip_client import GoshiipClient
from app.config.settings import get_settings

logger = logging.getLogger(__name__)

_platform_user_id: Optional[str] = None


async def get_platform_user_id(client: GoshiipClient) -> str:
    """
    Return GOSHIIP_USER_ID, or the id fetched from the GoShiip profile.

    The fetched id is cached for the lifetime of the process.

    Raises:
        GoshiipError: When the id is not configured and cannot be fetched
    """
    global _platform_user_id

    configured = get_settings().GOSHIIP_USER_ID
    if configured:
        return configured
    if _platform_user_id is None:
        _platform_user_id = await client.get_platform_user_id()
        logger.info(f"GoShiip platform user id resolved: {_platform_user_id}")
    return _platform_user_id


def reset_platform_user_id() -> None:
    global _platform_user_id
    _platform_user_id = None
