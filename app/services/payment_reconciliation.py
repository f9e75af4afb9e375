"""
Payment-to-Shipment Reconciliation Use Case

Turns a verified payment into a booked and assigned shipment:

    verify payment -> record transaction -> update order -> book shipment
    -> assign carrier -> report combined result

Persistence is best effort: a failed write is logged and the flow goes on.
There are no compensating actions.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError

from app.clients.goshiip_client import GoshiipClient, GoshiipError
from app.clients.paystack_client import PaystackClient, PaystackError
from app.core.exceptions import AppError, BadRequestError, ConflictError, ExternalServiceError
from app.repositories.order_repository import OrderRepository
from app.repositories.transaction_repository import TransactionRepository
from app.services.shipping_account import get_platform_user_id

logger = logging.getLogger(__name__)

PAYMENT_SUCCESS = "success"


@dataclass
class ReconciliationResult:
    """Outcome of a reconciliation, rendered as the response envelope."""

    message: str
    data: dict[str, Any]
    status_code: int = status.HTTP_200_OK


def _parse_paid_at(value: Any) -> datetime:
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable paid_at value: {value}")
    return datetime.now(timezone.utc)


class VerifyTransactionUseCase:
    """
    Use Case: Verify Transaction

    Responsibilities:
    - Confirm the payment with Paystack
    - Record the transaction and link it to its order
    - Book the shipment quoted at checkout and store its reference
    - Trigger carrier assignment and report every step's status
    """

    def __init__(
        self,
        paystack: PaystackClient,
        goshiip: GoshiipClient,
        transaction_repository: TransactionRepository,
        order_repository: OrderRepository,
    ):
        self.paystack = paystack
        self.goshiip = goshiip
        self.transaction_repository = transaction_repository
        self.order_repository = order_repository

    async def execute(self, reference: str) -> ReconciliationResult:
        """
        Run the reconciliation for a payment reference.

        Raises:
            ExternalServiceError: Paystack unreachable (502) or booking transport failure (502)
            BadRequestError: Payment not successful, or booking refused
            ConflictError: Reference already reconciled and shipped
            AppError: Assignment could not be triggered (500)
        """
        payment = await self._verify_payment(reference)

        metadata = payment.get("metadata") if isinstance(payment.get("metadata"), dict) else {}
        order_id = metadata.get("order_id")
        rate_id = metadata.get("rate_id")
        redis_key = metadata.get("redis_key")

        await self._record_payment(payment, order_id)

        booking = await self._book_shipment(redis_key, rate_id)
        booking_data = booking.get("data") or {}
        shipment_id = booking_data.get("shipmentId")
        shipment_reference = booking_data.get("reference")

        await self._record_shipment(order_id, shipment_reference)

        return await self._assign_shipment(payment, booking, shipment_id)

    async def _verify_payment(self, reference: str) -> dict[str, Any]:
        logger.info(f"Starting transaction verification for reference: {reference}")
        try:
            payment = await self.paystack.verify_transaction(reference)
        except PaystackError as e:
            raise ExternalServiceError(
                f"Error verifying transaction: {e.message}", status.HTTP_502_BAD_GATEWAY, e.details
            ) from e

        if payment.get("status") != PAYMENT_SUCCESS:
            logger.warning(f"Transaction verification failed: {reference} status={payment.get('status')}")
            raise BadRequestError("Transaction verification failed")
        return payment

    async def _record_payment(self, payment: dict[str, Any], order_id: Optional[str]) -> None:
        reference = payment.get("reference")

        try:
            existing = await self.transaction_repository.get_by_reference(reference)
            if existing is not None:
                order = await self.order_repository.get_by_id(existing.order_id) if existing.order_id else None
                if order is not None and order.shipment_reference:
                    raise ConflictError("Transaction already processed")
                logger.info(f"Transaction {reference} already recorded, resuming shipment booking")
            else:
                customer = payment.get("customer") or {}
                await self.transaction_repository.create(
                    transaction_id=str(payment.get("id")),
                    reference=reference,
                    amount=payment.get("amount"),
                    order_id=str(order_id) if order_id else None,
                    currency=payment.get("currency"),
                    status=payment.get("status"),
                    customer_email=customer.get("email"),
                    payment_method=payment.get("channel"),
                    paid_at=_parse_paid_at(payment.get("paid_at")),
                    gateway_response=payment.get("gateway_response"),
                )

            if order_id:
                await self.order_repository.mark_paid(order_id, reference)
        except SQLAlchemyError as e:
            logger.error(f"Error saving transaction and updating order {order_id}: {e}")

    async def _book_shipment(self, redis_key: Optional[str], rate_id: Optional[str]) -> dict[str, Any]:
        try:
            user_id = await get_platform_user_id(self.goshiip)
            booking = await self.goshiip.book_shipment(redis_key=redis_key, rate_id=rate_id, user_id=user_id)
        except GoshiipError as e:
            logger.error(f"Error booking shipment: {e.message} {e.payload}")
            raise ExternalServiceError(
                f"Error occurred during booking process. {e.message}", status.HTTP_502_BAD_GATEWAY, e.payload
            ) from e

        if not booking.get("status"):
            logger.warning(f"Booking failed: {booking.get('message')}")
            raise BadRequestError(f"Booking failed. {booking.get('message')}")

        logger.info(f"Booking successful: {booking.get('data')}")
        return booking

    async def _record_shipment(self, order_id: Optional[str], shipment_reference: Optional[str]) -> None:
        if not order_id or not shipment_reference:
            return
        try:
            await self.order_repository.mark_shipped(order_id, shipment_reference)
        except SQLAlchemyError as e:
            logger.error(f"Error updating order {order_id} with shipment reference: {e}")

    async def _assign_shipment(
        self, payment: dict[str, Any], booking: dict[str, Any], shipment_id: Any
    ) -> ReconciliationResult:
        try:
            assign = await self.goshiip.assign_shipment(shipment_id)
        except GoshiipError as e:
            logger.error(f"Error assigning shipment {shipment_id}: {e.message} {e.payload}")
            raise AppError(
                f"Shipment booked, but failed to trigger assignment. {e.message}",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                e.payload,
            ) from e

        if assign.status_code != status.HTTP_200_OK:
            logger.warning(f"Assignment failed for shipment {shipment_id}: {assign.message}")
            return ReconciliationResult(
                message="Shipment booked but assignment failed.",
                data={"assignStatus": assign.message},
                status_code=assign.status_code,
            )

        return ReconciliationResult(
            message="Payment verified, shipment booked, and assignment successful.",
            data={
                "transactionDetails": {
                    "amount": payment.get("amount"),
                    "status": payment.get("status"),
                    "paymentMethod": payment.get("channel"),
                    "currency": payment.get("currency"),
                    "paidAt": payment.get("paid_at"),
                    "shipmentId": shipment_id,
                },
                "bookingStatus": booking.get("message"),
                "assignStatus": assign.message,
            },
        )
