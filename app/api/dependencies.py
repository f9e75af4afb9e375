"""
FastAPI dependencies: database session, repositories, external clients and
authentication.
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients.goshiip_client import GoshiipClient
from app.clients.image_host_client import ImageHostClient
from app.clients.paystack_client import PaystackClient
from app.core.exceptions import UnauthorizedError
from app.database.async_db import get_async_db
from app.models.db.user import AdminDB, UserDB
from app.repositories.notification_repository import AdminNotificationRepository, NotificationRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.user_repository import AdminRepository, UserRepository
from app.services.bank_service import BankDirectory, get_bank_directory
from app.services.email_service import EmailService
from app.services.payment_reconciliation import VerifyTransactionUseCase
from app.services.product_service import ProductService
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)

token_service = TokenService()
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# Repositories
# ============================================================


def get_user_repository(db: AsyncSession = Depends(get_async_db)) -> UserRepository:  # noqa: B008
    return UserRepository(db)


def get_admin_repository(db: AsyncSession = Depends(get_async_db)) -> AdminRepository:  # noqa: B008
    return AdminRepository(db)


def get_product_repository(db: AsyncSession = Depends(get_async_db)) -> ProductRepository:  # noqa: B008
    return ProductRepository(db)


def get_order_repository(db: AsyncSession = Depends(get_async_db)) -> OrderRepository:  # noqa: B008
    return OrderRepository(db)


def get_transaction_repository(db: AsyncSession = Depends(get_async_db)) -> TransactionRepository:  # noqa: B008
    return TransactionRepository(db)


def get_notification_repository(db: AsyncSession = Depends(get_async_db)) -> NotificationRepository:  # noqa: B008
    return NotificationRepository(db)


def get_admin_notification_repository(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> AdminNotificationRepository:
    return AdminNotificationRepository(db)


# ============================================================
# External clients and services
# ============================================================


async def get_paystack_client() -> AsyncGenerator[PaystackClient, None]:
    """Yield a Paystack client whose HTTP session lives for the request."""
    async with PaystackClient() as client:
        yield client


async def get_goshiip_client() -> AsyncGenerator[GoshiipClient, None]:
    """Yield a GoShiip client whose HTTP session lives for the request."""
    async with GoshiipClient() as client:
        yield client


def get_image_host() -> ImageHostClient:
    return ImageHostClient()


def get_email_service() -> EmailService:
    return EmailService()


def get_token_service() -> TokenService:
    return token_service


def get_banks() -> BankDirectory:
    return get_bank_directory()


def get_product_service(
    product_repository: ProductRepository = Depends(get_product_repository),  # noqa: B008
    user_repository: UserRepository = Depends(get_user_repository),  # noqa: B008
    notification_repository: NotificationRepository = Depends(get_notification_repository),  # noqa: B008
    admin_notification_repository: AdminNotificationRepository = Depends(  # noqa: B008
        get_admin_notification_repository
    ),
) -> ProductService:
    return ProductService(
        product_repository, user_repository, notification_repository, admin_notification_repository
    )


def get_verify_transaction_use_case(
    paystack: PaystackClient = Depends(get_paystack_client),  # noqa: B008
    goshiip: GoshiipClient = Depends(get_goshiip_client),  # noqa: B008
    transaction_repository: TransactionRepository = Depends(get_transaction_repository),  # noqa: B008
    order_repository: OrderRepository = Depends(get_order_repository),  # noqa: B008
) -> VerifyTransactionUseCase:
    return VerifyTransactionUseCase(paystack, goshiip, transaction_repository, order_repository)


# ============================================================
# Authentication
# ============================================================


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")
    return credentials.credentials


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    user_repository: UserRepository = Depends(get_user_repository),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
) -> UserDB:
    """
    Resolve the user from the `Authorization: Bearer <token>` header.

    Raises:
        UnauthorizedError: Missing, invalid or expired token, or unknown user
    """
    user_id = tokens.decode_user_token(_bearer_token(credentials))
    user = await user_repository.get_by_id(user_id)
    if user is None:
        logger.warning(f"Token subject not found: {user_id}")
        raise UnauthorizedError("Not authorized, token failed")
    return user


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    admin_repository: AdminRepository = Depends(get_admin_repository),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
) -> AdminDB:
    """Resolve the admin from an admin token."""
    admin_id = tokens.decode_admin_token(_bearer_token(credentials))
    admin = await admin_repository.get_by_id(admin_id)
    if admin is None:
        logger.warning(f"Admin token subject not found: {admin_id}")
        raise UnauthorizedError("Not authorized, token failed")
    return admin
