"""
Repository for verified payment transactions
"""

from typing import Any, Optional

from sqlalchemy import select

from app.models.db.transaction import Transaction
from app.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    model = Transaction

    async def get_by_reference(self, reference: str) -> Optional[Transaction]:
        result = await self.session.execute(select(Transaction).where(Transaction.reference == reference))
        return result.scalar_one_or_none()

    async def list_by_customer_email(self, email: str) -> list[Transaction]:
        result = await self.session.execute(
            select(Transaction).where(Transaction.customer_email == email).order_by(Transaction.paid_at.desc())
        )
        return list(result.scalars().all())

    async def create(self, **fields: Any) -> Transaction:
        return await self.add(Transaction(**fields))
