"""
Repository for marketplace users and admins
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select

from app.models.db.user import AdminDB, UserDB
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[UserDB]):
    """CRUD operations for `UserDB`."""

    model = UserDB

    async def get_by_email(self, email: str) -> Optional[UserDB]:
        result = await self.session.execute(select(UserDB).where(func.lower(UserDB.email) == email.lower()))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[UserDB]:
        result = await self.session.execute(select(UserDB).where(UserDB.username == username))
        return result.scalars().first()

    async def get_by_reset_token(self, token: str) -> Optional[UserDB]:
        """Return the user owning a reset token that has not expired yet."""
        result = await self.session.execute(
            select(UserDB).where(
                UserDB.reset_password_token == token,
                UserDB.reset_password_expires > datetime.now(timezone.utc),
            )
        )
        return result.scalar_one_or_none()

    async def create(
        self, full_name: str, username: str, email: str, password_hash: str
    ) -> UserDB:
        user = UserDB(
            full_name=full_name,
            username=username,
            email=email,
            password_hash=password_hash,
            is_verified=False,
        )
        user = await self.add(user)
        logger.info(f"User created: {user.username}")
        return user


class AdminRepository(BaseRepository[AdminDB]):
    model = AdminDB

    async def get_by_email(self, email: str) -> Optional[AdminDB]:
        result = await self.session.execute(select(AdminDB).where(func.lower(AdminDB.email) == email.lower()))
        return result.scalar_one_or_none()
