"""Test utilities and helpers."""

from tests.utils.assertions import assert_error, assert_ok
from tests.utils.factories import (
    make_admin,
    make_admin_notification,
    make_notification,
    make_order,
    make_product,
    make_transaction,
    make_user,
    paystack_transaction,
)

__all__ = [
    # Assertions
    "assert_ok",
    "assert_error",
    # Factories
    "make_user",
    "make_admin",
    "make_product",
    "make_order",
    "make_transaction",
    "make_notification",
    "make_admin_notification",
    "paystack_transaction",
]
