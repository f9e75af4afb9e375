"""
Repositories Module

Async SQLAlchemy repositories, one per model.
"""

from .base import BaseRepository, parse_uuid
from .notification_repository import AdminNotificationRepository, NotificationRepository
from .order_repository import OrderRepository
from .product_repository import ProductRepository
from .transaction_repository import TransactionRepository
from .user_repository import AdminRepository, UserRepository

__all__ = [
    "BaseRepository",
    "parse_uuid",
    "UserRepository",
    "AdminRepository",
    "ProductRepository",
    "OrderRepository",
    "TransactionRepository",
    "NotificationRepository",
    "AdminNotificationRepository",
]
