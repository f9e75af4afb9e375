"""
Application lifecycle management using the FastAPI lifespan pattern.

Startup warms the caches the request path relies on (bank directory,
GoShiip platform user id); shutdown disposes the database engine.
Warm-up failures are logged and never block startup.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.clients.goshiip_client import GoshiipClient, GoshiipError
from app.config.settings import get_settings
from app.database.async_db import async_engine
from app.services.bank_service import get_bank_directory
from app.services.shipping_account import get_platform_user_id

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup initialization and graceful shutdown.
    """

    def __init__(self) -> None:
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")

        self._verify_configurations()
        await self._warm_bank_directory()
        await self._resolve_platform_user()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await async_engine.dispose()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        """Warn about optional integrations that are switched off."""
        settings = get_settings()
        if not settings.cloudinary_enabled:
            logger.warning("Cloudinary is not configured - image uploads will fail")
        if not settings.EMAIL_USERNAME:
            logger.warning("EMAIL_USERNAME not configured - password reset emails are disabled")

    async def _warm_bank_directory(self) -> None:
        banks = await get_bank_directory().refresh()
        logger.info(f"Bank directory warmed with {len(banks)} banks")

    async def _resolve_platform_user(self) -> None:
        try:
            async with GoshiipClient() as client:
                user_id = await get_platform_user_id(client)
            logger.info(f"Shipments will be booked for GoShiip user {user_id}")
        except GoshiipError as e:
            logger.warning(f"GoShiip platform user id not resolved at startup: {e}")


# Global lifecycle manager instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()
