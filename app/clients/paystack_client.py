"""
Paystack API Client

Async client for Paystack payment processing using Bearer (secret key) auth.

Connection Details:
    - Base URL: https://api.paystack.co
    - Auth: Bearer secret key

Endpoints:
    - GET /transaction/verify/{reference} - Verify a payment
    - POST /transaction/initialize - Start a split payment
    - GET /bank - List supported banks
    - GET /bank/resolve - Resolve an account number to an account name
    - POST /subaccount - Create a seller subaccount for split payments
"""

from __future__ import annotations

import logging
from typing import Any

from app.clients.base import BaseAPIClient, GatewayError
from app.config.settings import get_settings

logger = logging.getLogger(__name__)


class PaystackError(GatewayError):
    """Paystack request failed."""

    service_name = "Paystack"


class PaystackClient(BaseAPIClient):
    """
    Async HTTP client for the Paystack API.

    Environment Variables:
        PAYSTACK_BASE_URL: API base URL
        PAYSTACK_SECRET_KEY: Bearer secret key
        PAYSTACK_TIMEOUT: Request timeout in seconds (default: 30)

    Example:
        async with PaystackClient() as client:
            payment = await client.verify_transaction("T123456")
            if payment["status"] == "success":
                ...
    """

    error_class = PaystackError

    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        retry_backoff: float | None = None,
    ):
        settings = get_settings()
        super().__init__(
            base_url=base_url or settings.PAYSTACK_BASE_URL,
            api_key=secret_key or settings.PAYSTACK_SECRET_KEY,
            timeout=timeout or settings.PAYSTACK_TIMEOUT,
            retry_backoff=retry_backoff,
        )

    async def verify_transaction(self, reference: str) -> dict[str, Any]:
        """
        Verify a transaction by reference.

        Args:
            reference: Transaction reference issued at initialization

        Returns:
            The transaction object (`data` of the Paystack reply), including
            status, amount, currency, channel, paid_at, customer and metadata.

        Raises:
            PaystackError: Network failure, bad credentials or unknown reference
        """
        logger.info(f"Verifying Paystack transaction: {reference}")
        reply = await self._request("GET", f"/transaction/verify/{reference}")
        data = reply.data.get("data") if isinstance(reply.data, dict) else None
        if not isinstance(data, dict):
            raise PaystackError("INVALID_RESPONSE", "Paystack returned no transaction data", payload=reply.data)

        logger.info(f"Paystack transaction {reference} status: {data.get('status')}")
        return data

    async def initialize_transaction(
        self,
        email: str,
        amount: int,
        subaccount: str,
        transaction_charge: int,
        bearer: str = "subaccount",
        metadata: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Initialize a split payment.

        Args:
            email: Buyer email
            amount: Total amount in kobo
            subaccount: Seller subaccount code
            transaction_charge: Flat platform charge in kobo
            bearer: Who bears Paystack fees ("account" or "subaccount")
            metadata: Data echoed back at verification time

        Returns:
            Full Paystack reply (status, message, data.authorization_url, ...)
        """
        payload: dict[str, Any] = {
            "email": email,
            "amount": amount,
            "subaccount": subaccount,
            "transaction_charge": transaction_charge,
            "bearer": bearer,
        }
        if metadata:
            payload["metadata"] = metadata

        logger.info(f"Initializing Paystack transaction: amount={amount}, subaccount={subaccount}")
        reply = await self._request("POST", "/transaction/initialize", json=payload)
        return reply.data

    async def list_banks(self) -> list[dict[str, Any]]:
        """Return the list of banks supported by Paystack."""
        reply = await self._request("GET", "/bank")
        banks = reply.data.get("data") if isinstance(reply.data, dict) else None
        return banks or []

    async def resolve_account(self, account_number: str, bank_code: str) -> dict[str, Any]:
        """Resolve an account number; returns the full Paystack reply."""
        reply = await self._request(
            "GET",
            "/bank/resolve",
            params={"account_number": account_number, "bank_code": bank_code},
        )
        return reply.data

    async def create_subaccount(
        self,
        business_name: str,
        bank_code: str,
        account_number: str,
        percentage_charge: float,
    ) -> dict[str, Any]:
        """Create a seller subaccount; returns the full Paystack reply."""
        payload = {
            "business_name": business_name,
            "bank_code": bank_code,
            "account_number": account_number,
            "percentage_charge": percentage_charge,
        }
        logger.info(f"Creating Paystack subaccount for {business_name}")
        reply = await self._request("POST", "/subaccount", json=payload)
        return reply.data
