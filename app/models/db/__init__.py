"""
Database models package - Organized by responsibility
"""

from .base import Base, TimestampMixin
from .notification import AdminNotification, Notification
from .orders import Order, OrderStatus
from .product import Product
from .transaction import Transaction
from .user import AdminDB, UserDB

__all__ = [
    "Base",
    "TimestampMixin",
    "UserDB",
    "AdminDB",
    "Product",
    "Order",
    "OrderStatus",
    "Transaction",
    "Notification",
    "AdminNotification",
]
