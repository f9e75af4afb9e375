"""
Repository for product listings
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.db.product import Product
from app.repositories.base import BaseRepository, parse_uuid

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository[Product]):
    """CRUD operations for `Product`. Reads eager-load the uploader."""

    model = Product

    async def get_by_id(self, product_id: Any) -> Optional[Product]:
        product_uuid = parse_uuid(product_id)
        if product_uuid is None:
            return None
        result = await self.session.execute(
            select(Product)
            .options(selectinload(Product.user))
            .where(Product.id == product_uuid)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_all(self, category: Optional[str] = None) -> list[Product]:
        query = select(Product).options(selectinload(Product.user)).order_by(Product.created_at.desc())
        if category:
            query = query.where(Product.category == category)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_by_uploader(self, uploader_id: Any) -> list[Product]:
        uploader_uuid = parse_uuid(uploader_id)
        if uploader_uuid is None:
            return []
        result = await self.session.execute(
            select(Product)
            .options(selectinload(Product.user))
            .where(Product.uploader_id == uploader_uuid)
            .order_by(Product.created_at.desc())
        )
        return list(result.scalars().all())

    async def create(self, **fields: Any) -> Product:
        product = await self.add(Product(**fields))
        logger.info(f"Product created: {product.id} ({product.tag})")
        return await self.get_by_id(product.id)

    async def update(self, entity: Product, **fields: Any) -> Product:
        await super().update(entity, **fields)
        return await self.get_by_id(entity.id)
