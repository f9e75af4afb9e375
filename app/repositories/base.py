import logging
import uuid
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """Return `value` as a UUID, or None when it is not a valid id."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class BaseRepository(Generic[T]):
    """
    Common async CRUD operations for a single model.

    Write operations commit immediately and roll back on failure, so one
    failed write never poisons later work on the same session.
    """

    model: type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, entity_id: Any) -> Optional[T]:
        entity_uuid = parse_uuid(entity_id)
        if entity_uuid is None:
            logger.warning(f"Invalid {self.model.__name__} id: {entity_id}")
            return None
        result = await self.session.execute(select(self.model).where(self.model.id == entity_uuid))
        return result.scalar_one_or_none()

    async def add(self, entity: T) -> T:
        self.session.add(entity)
        await self._commit()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: T, **fields: Any) -> T:
        for key, value in fields.items():
            setattr(entity, key, value)
        await self._commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: T) -> None:
        await self.session.delete(entity)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error committing {self.model.__name__}: {e}")
            await self.session.rollback()
            raise
