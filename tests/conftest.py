"""
Shared pytest fixtures for all tests.

This module provides the FastAPI app and test client, dependency override
helpers, mocked repositories and external clients, and signed-in user/admin
fixtures.
"""

import os
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Ensure test environment before the settings singleton is created
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("TOKEN_SECRET_KEY", "test-user-secret")
os.environ.setdefault("ADMIN_TOKEN_SECRET_KEY", "test-admin-secret")
os.environ.setdefault("PAYSTACK_SECRET_KEY", "sk_test_secret")
os.environ.setdefault("GOSHIIP_API_KEY", "goshiip-test-key")

from app.api import dependencies as deps  # noqa: E402
from app.clients.goshiip_client import GoshiipClient  # noqa: E402
from app.clients.image_host_client import ImageHostClient  # noqa: E402
from app.clients.paystack_client import PaystackClient  # noqa: E402
from app.repositories.notification_repository import (  # noqa: E402
    AdminNotificationRepository,
    NotificationRepository,
)
from app.repositories.order_repository import OrderRepository  # noqa: E402
from app.repositories.product_repository import ProductRepository  # noqa: E402
from app.repositories.transaction_repository import TransactionRepository  # noqa: E402
from app.repositories.user_repository import AdminRepository, UserRepository  # noqa: E402
from app.services.bank_service import BankDirectory  # noqa: E402
from app.services.email_service import EmailService  # noqa: E402
from tests.utils.factories import make_admin, make_user  # noqa: E402


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================


@pytest.fixture
def fastapi_app():
    """FastAPI application instance; overrides are cleared after each test."""
    from app.main import app

    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(fastapi_app) -> TestClient:
    """Test client (the lifespan is not run, so nothing reaches third parties)."""
    return TestClient(fastapi_app)


@pytest.fixture
def override(fastapi_app) -> Callable[[Callable, Any], Any]:
    """Return a helper that makes a dependency resolve to a fixed value."""

    def _override(dependency: Callable, value: Any) -> Any:
        fastapi_app.dependency_overrides[dependency] = lambda: value
        return value

    return _override


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def user_repository(override) -> AsyncMock:
    return override(deps.get_user_repository, AsyncMock(spec=UserRepository))


@pytest.fixture
def admin_repository(override) -> AsyncMock:
    return override(deps.get_admin_repository, AsyncMock(spec=AdminRepository))


@pytest.fixture
def product_repository(override) -> AsyncMock:
    return override(deps.get_product_repository, AsyncMock(spec=ProductRepository))


@pytest.fixture
def order_repository(override) -> AsyncMock:
    return override(deps.get_order_repository, AsyncMock(spec=OrderRepository))


@pytest.fixture
def transaction_repository(override) -> AsyncMock:
    return override(deps.get_transaction_repository, AsyncMock(spec=TransactionRepository))


@pytest.fixture
def notification_repository(override) -> AsyncMock:
    return override(deps.get_notification_repository, AsyncMock(spec=NotificationRepository))


@pytest.fixture
def admin_notification_repository(override) -> AsyncMock:
    return override(deps.get_admin_notification_repository, AsyncMock(spec=AdminNotificationRepository))


# ============================================================================
# EXTERNAL SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def paystack(override) -> AsyncMock:
    return override(deps.get_paystack_client, AsyncMock(spec=PaystackClient))


@pytest.fixture
def goshiip(override) -> AsyncMock:
    return override(deps.get_goshiip_client, AsyncMock(spec=GoshiipClient))


@pytest.fixture
def image_host(override) -> AsyncMock:
    mock = AsyncMock(spec=ImageHostClient)
    mock.upload_image.return_value = "https://images.test/uploaded.jpg"
    return override(deps.get_image_host, mock)


@pytest.fixture
def mailer(override) -> AsyncMock:
    return override(deps.get_email_service, AsyncMock(spec=EmailService))


@pytest.fixture
def bank_directory(override) -> AsyncMock:
    return override(deps.get_banks, AsyncMock(spec=BankDirectory))


# ============================================================================
# AUTH FIXTURES
# ============================================================================


@pytest.fixture
def current_user(override):
    """A signed-in seller with a complete, verified profile."""
    return override(deps.get_current_user, make_user())


@pytest.fixture
def current_admin(override):
    return override(deps.get_current_admin, make_admin())


@pytest.fixture
def admin():
    return make_admin()


@pytest.fixture
def admin_auth_headers(admin, admin_repository) -> dict[str, str]:
    """Headers carrying a real admin token that resolves to `admin`."""
    admin_repository.get_by_id.return_value = admin
    token = deps.token_service.create_admin_token(admin.id)
    return {"Authorization": f"Bearer {token}"}
