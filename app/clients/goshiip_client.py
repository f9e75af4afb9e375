"""
GoShiip API Client

Async client for the GoShiip logistics API (courier partners, rates,
shipment booking, carrier assignment, tracking and cancellation).

Connection Details:
    - Base URL: https://delivery-staging.apiideraos.com/api/v2/token
    - Auth: Bearer API key
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import status

from app.clients.base import BaseAPIClient, GatewayError, GatewayReply
from app.config.settings import get_settings

logger = logging.getLogger(__name__)

# Every rate request is quoted for the same parcel.
CONSTANT_PARCELS = {
    "weight": 5,
    "length": 10,
    "width": 10,
    "height": 5,
}

BOOKING_PLATFORM = "web2"
DELIVERY_NOTE = "Your delivery is on the way"

_DISTANCE_ERROR = 'Undefined array key "distance"'
_TRUQ_WEIGHT_ERROR = "Truq cannot service this shipment because of the weight."


class GoshiipError(GatewayError):
    """GoShiip request failed."""

    service_name = "GoShiip"


def interpret_rate_failure(rates_message: str | None) -> GoshiipError:
    """Translate a `rates.status == false` message into a user-facing error."""
    message = rates_message or ""
    if _DISTANCE_ERROR in message:
        return GoshiipError(
            "INVALID_ADDRESS",
            "Invalid address. Please enter a valid address.",
            status.HTTP_400_BAD_REQUEST,
        )
    if _TRUQ_WEIGHT_ERROR in message:
        return GoshiipError(
            "INVALID_WEIGHT",
            f"Invalid shipment weight. {_TRUQ_WEIGHT_ERROR}",
            status.HTTP_400_BAD_REQUEST,
        )
    return GoshiipError(
        "RATE_ERROR",
        f"GoShiip API error {message}",
        status.HTTP_400_BAD_REQUEST,
        payload=message,
    )


def _failed_rates_message(payload: Any) -> tuple[bool, str | None]:
    if not isinstance(payload, dict):
        return False, None
    rates = payload.get("rates")
    if isinstance(rates, dict) and rates.get("status") is False:
        return True, rates.get("message")
    return False, None


class GoshiipClient(BaseAPIClient):
    """
    Async HTTP client for the GoShiip logistics API.

    Environment Variables:
        GOSHIIP_BASE_URL: API base URL
        GOSHIIP_API_KEY: Bearer API key
        GOSHIIP_USER_ID: Platform user id used for bookings (optional)
        GOSHIIP_TIMEOUT: Request timeout in seconds (default: 30)

    Example:
        async with GoshiipClient() as client:
            couriers = await client.get_couriers("local")
    """

    error_class = GoshiipError

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        retry_backoff: float | None = None,
    ):
        settings = get_settings()
        super().__init__(
            base_url=base_url or settings.GOSHIIP_BASE_URL,
            api_key=api_key or settings.GOSHIIP_API_KEY,
            timeout=timeout or settings.GOSHIIP_TIMEOUT,
            retry_backoff=retry_backoff,
        )

    async def get_couriers(self, courier_type: str) -> Any:
        """List courier partners for a shipment type."""
        reply = await self._request("GET", "/shipments/courier-partners/", params={"type": courier_type})
        return reply.data

    async def get_rate(
        self,
        carrier_name: str,
        shipment_type: str,
        to_address: dict[str, Any],
        from_address: dict[str, Any],
        items: list[Any],
    ) -> Any:
        """
        Quote a single courier rate.

        The parcel dimensions are always CONSTANT_PARCELS.

        Raises:
            GoshiipError: with a user-facing message for validation (400),
                authentication (401), rate limit (429) and rate failures.
        """
        payload = {
            "type": shipment_type,
            "toAddress": to_address,
            "fromAddress": from_address,
            "parcels": CONSTANT_PARCELS,
            "items": items,
        }

        try:
            reply = await self._request("POST", f"/tariffs/getpricesingle/{carrier_name}", json=payload)
        except GoshiipError as e:
            raise self._rate_error(e) from e

        failed, rates_message = _failed_rates_message(reply.data)
        if failed:
            raise interpret_rate_failure(rates_message)
        return reply.data

    @staticmethod
    def _rate_error(error: GoshiipError) -> GoshiipError:
        if error.upstream_status == 400:
            return GoshiipError("VALIDATION_ERROR", "Validation error", status.HTTP_400_BAD_REQUEST, 400, error.payload)
        if error.upstream_status == 401:
            return GoshiipError(
                "AUTH_ERROR", "Authentication error", status.HTTP_401_UNAUTHORIZED, 401, error.payload
            )
        if error.upstream_status == 429:
            return GoshiipError(
                "RATE_LIMITED", "Rate limit exceeded", status.HTTP_429_TOO_MANY_REQUESTS, 429, error.payload
            )

        failed, rates_message = _failed_rates_message(error.payload)
        if failed:
            return interpret_rate_failure(rates_message)

        return GoshiipError(
            error.error_code,
            f"Failed to fetch rates {error.message}",
            error.status_code,
            error.upstream_status,
            error.payload,
        )

    async def book_shipment(self, redis_key: str | None, rate_id: str | None, user_id: str | None) -> dict[str, Any]:
        """
        Book a shipment for a previously quoted rate.

        Returns:
            The GoShiip reply: {"status": bool, "message": str,
            "data": {"shipmentId": ..., "reference": ...}}
        """
        payload = {
            "redis_key": redis_key,
            "rate_id": rate_id,
            "user_id": user_id,
            "platform": BOOKING_PLATFORM,
            "delivery_note": DELIVERY_NOTE,
        }
        logger.info(f"Booking GoShiip shipment for rate {rate_id}")
        reply = await self._request("POST", "/bookshipment", json=payload)
        return reply.data if isinstance(reply.data, dict) else {}

    async def assign_shipment(self, shipment_id: Any) -> GatewayReply:
        """Ask GoShiip to assign a carrier; returns the raw reply with its status code."""
        logger.info(f"Assigning GoShiip shipment {shipment_id}")
        return await self._request("POST", "/shipment/assign", json={"shipment_id": shipment_id})

    async def track_shipment(self, reference: str) -> dict[str, Any]:
        reply = await self._request("GET", f"/shipment/track/{reference}")
        return reply.data if isinstance(reply.data, dict) else {}

    async def list_shipments(self, shipment_status: str) -> dict[str, Any]:
        reply = await self._request("GET", "/user/allorders", params={"status": shipment_status})
        return reply.data if isinstance(reply.data, dict) else {}

    async def cancel_shipment(self, reference: str) -> dict[str, Any]:
        logger.info(f"Cancelling GoShiip shipment {reference}")
        reply = await self._request("GET", f"/shipment/cancel/{reference}")
        return reply.data if isinstance(reply.data, dict) else {}

    async def get_platform_user_id(self) -> str:
        """Fetch the platform account id from the profile endpoint."""
        reply = await self._request("GET", "/user/myprofile")
        data = reply.data.get("data") if isinstance(reply.data, dict) else None
        if not isinstance(data, dict) or data.get("id") is None:
            raise GoshiipError("INVALID_RESPONSE", "Failed to fetch platform user ID", payload=reply.data)
        return str(data["id"])
