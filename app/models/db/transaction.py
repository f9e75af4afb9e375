"""
Payment transaction model
"""

import uuid

from sqlalchemy import Column, DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID

from .base import Base, TimestampMixin, isoformat


class Transaction(Base, TimestampMixin):
    """A verified payment as reported by the payment gateway."""

    __tablename__ = "transactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    transaction_id = Column(String(50), nullable=False)  # gateway transaction id
    reference = Column(String(100), unique=True, nullable=False)
    amount = Column(Integer, nullable=False)  # minor units (kobo)
    order_id = Column(String(64))
    currency = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False)
    customer_email = Column(String(255), nullable=False)
    payment_method = Column(String(50), nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=False)
    gateway_response = Column(String(255), nullable=False)

    __table_args__ = (
        Index("idx_transactions_reference", reference),
        Index("idx_transactions_customer_paid", customer_email, paid_at),
    )

    def __repr__(self):
        return f"<Transaction(reference='{self.reference}', status='{self.status}', amount={self.amount})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "transactionId": self.transaction_id,
            "reference": self.reference,
            "amount": self.amount,
            "orderId": self.order_id,
            "currency": self.currency,
            "status": self.status,
            "customerEmail": self.customer_email,
            "paymentMethod": self.payment_method,
            "paidAt": isoformat(self.paid_at),
            "gatewayResponse": self.gateway_response,
            "createdAt": isoformat(self.created_at),
        }

    def to_summary(self) -> dict:
        """Subset returned by the public lookup endpoint."""
        return {
            "transactionId": self.transaction_id,
            "reference": self.reference,
            "amount": self.amount,
            "currency": self.currency,
            "status": self.status,
            "customerEmail": self.customer_email,
            "paymentMethod": self.payment_method,
            "paidAt": isoformat(self.paid_at),
        }
