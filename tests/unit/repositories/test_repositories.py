"""
Unit tests for the repositories against a mocked AsyncSession.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.models.db.orders import OrderStatus
from app.repositories.base import parse_uuid
from app.repositories.notification_repository import NotificationRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.user_repository import UserRepository
from tests.utils import make_notification, make_order, make_transaction


def result_of(value) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalars.return_value.all.return_value = value if isinstance(value, list) else [value]
    result.scalars.return_value.first.return_value = value
    return result


@pytest.fixture
def session():
    mock = AsyncMock()
    mock.add = MagicMock()
    return mock


@pytest.mark.repository
def test_parse_uuid():
    value = uuid.uuid4()

    assert parse_uuid(value) is value
    assert parse_uuid(str(value)) == value
    assert parse_uuid("not-a-uuid") is None
    assert parse_uuid(None) is None


@pytest.mark.repository
@pytest.mark.asyncio
class TestBaseRepository:
    async def test_get_by_id_with_invalid_id_skips_query(self, session):
        repo = OrderRepository(session)

        assert await repo.get_by_id("abc") is None
        session.execute.assert_not_awaited()

    async def test_add_commits_and_refreshes(self, session):
        repo = UserRepository(session)

        user = await repo.create(full_name="Ada Obi", username="adaobi", email="ada@example.com", password_hash="h")

        session.add.assert_called_once_with(user)
        session.commit.assert_awaited_once()
        session.refresh.assert_awaited_once_with(user)
        assert user.is_verified is False

    async def test_failed_commit_rolls_back(self, session):
        session.commit.side_effect = SQLAlchemyError("boom")
        repo = UserRepository(session)

        with pytest.raises(SQLAlchemyError):
            await repo.create(full_name="Ada Obi", username="adaobi", email="ada@example.com", password_hash="h")

        session.rollback.assert_awaited_once()


@pytest.mark.repository
@pytest.mark.asyncio
class TestOrderRepository:
    async def test_mark_paid(self, session):
        order = make_order()
        session.execute.return_value = result_of(order)

        updated = await OrderRepository(session).mark_paid(order.id, "ref_123")

        assert updated is order
        assert order.transaction_reference == "ref_123"
        assert order.status == OrderStatus.PAID
        session.commit.assert_awaited_once()

    async def test_mark_shipped(self, session):
        order = make_order(status=OrderStatus.PAID)
        session.execute.return_value = result_of(order)

        await OrderRepository(session).mark_shipped(str(order.id), "SHP-77")

        assert order.shipment_reference == "SHP-77"
        assert order.status == OrderStatus.SHIPPED

    async def test_mark_paid_missing_order(self, session):
        session.execute.return_value = result_of(None)

        assert await OrderRepository(session).mark_paid(uuid.uuid4(), "ref_123") is None
        session.commit.assert_not_awaited()

    async def test_list_by_user_with_invalid_id(self, session):
        assert await OrderRepository(session).list_by_user("nope") == []
        session.execute.assert_not_awaited()


@pytest.mark.repository
@pytest.mark.asyncio
class TestNotificationRepository:
    async def test_get_for_user_hides_other_users_notifications(self, session):
        owner = uuid.uuid4()
        session.execute.return_value = result_of(make_notification(user_id=owner))
        repo = NotificationRepository(session)

        assert await repo.get_for_user(uuid.uuid4(), owner) is not None
        assert await repo.get_for_user(uuid.uuid4(), uuid.uuid4()) is None

    async def test_mark_all_read_commits(self, session):
        await NotificationRepository(session).mark_all_read(uuid.uuid4())

        session.execute.assert_awaited_once()
        session.commit.assert_awaited_once()


@pytest.mark.repository
@pytest.mark.asyncio
async def test_transaction_lookup_by_reference(session):
    transaction = make_transaction()
    session.execute.return_value = result_of(transaction)

    assert await TransactionRepository(session).get_by_reference("ref_123") is transaction
