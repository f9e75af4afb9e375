"""
Repository for orders
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.db.orders import Order, OrderStatus
from app.repositories.base import BaseRepository, parse_uuid

logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository[Order]):
    """CRUD operations for `Order` plus the payment/shipment status updates."""

    model = Order

    async def create(self, user_id: Any, product_id: Any, amount: float) -> Order:
        order = Order(
            user_id=parse_uuid(user_id),
            product_id=parse_uuid(product_id),
            amount=amount,
            status=OrderStatus.PENDING,
        )
        order = await self.add(order)
        logger.info(f"Order created: {order.id}")
        return order

    async def list_by_user(self, user_id: Any) -> list[Order]:
        """Orders of a user, newest first, with the user and product loaded."""
        user_uuid = parse_uuid(user_id)
        if user_uuid is None:
            logger.warning(f"Invalid user_id format: {user_id}")
            return []
        result = await self.session.execute(
            select(Order)
            .options(selectinload(Order.user), selectinload(Order.product))
            .where(Order.user_id == user_uuid)
            .order_by(Order.created_at.desc())
        )
        return list(result.scalars().all())

    async def mark_paid(self, order_id: Any, transaction_reference: str) -> Optional[Order]:
        order = await self.get_by_id(order_id)
        if order is None:
            logger.warning(f"Order not found when recording payment: {order_id}")
            return None
        return await self.update(order, transaction_reference=transaction_reference, status=OrderStatus.PAID)

    async def mark_shipped(self, order_id: Any, shipment_reference: str) -> Optional[Order]:
        order = await self.get_by_id(order_id)
        if order is None:
            logger.warning(f"Order not found when recording shipment: {order_id}")
            return None
        return await self.update(order, shipment_reference=shipment_reference, status=OrderStatus.SHIPPED)
