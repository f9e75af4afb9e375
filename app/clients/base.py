"""
Shared async HTTP plumbing for third-party REST clients.

Each concrete client sets `error_class` and its base URL/auth headers; this
module handles the httpx session, retries for idempotent reads and the
translation of transport/HTTP failures into `GatewayError`s.

Retry Strategy:
- Idempotent requests (GET): retry transport errors with exponential backoff
- Everything else: single attempt (bookings and payments must not repeat)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi import status
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class GatewayError(ExternalServiceError):
    """
    Base exception for third-party API errors.

    Attributes:
        error_code: Machine-readable error code (AUTH_ERROR, VALIDATION_ERROR, ...)
        upstream_status: HTTP status returned by the third party, if any
        payload: Parsed response body, if any
    """

    service_name = "Gateway"

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        upstream_status: int | None = None,
        payload: Any = None,
    ):
        self.error_code = error_code
        self.upstream_status = upstream_status
        self.payload = payload
        super().__init__(message, status_code, payload)

    @classmethod
    def from_response(cls, upstream_status: int, payload: Any) -> GatewayError:
        """Build the error matching an HTTP failure status."""
        message = _extract_message(payload) or f"{cls.service_name} request failed with status {upstream_status}"

        if upstream_status == 401:
            return cls("AUTH_ERROR", message, status.HTTP_401_UNAUTHORIZED, upstream_status, payload)
        if upstream_status == 404:
            return cls("NOT_FOUND", message, status.HTTP_404_NOT_FOUND, upstream_status, payload)
        if upstream_status == 429:
            return cls("RATE_LIMITED", message, status.HTTP_429_TOO_MANY_REQUESTS, upstream_status, payload)
        if 400 <= upstream_status < 500:
            return cls("VALIDATION_ERROR", message, status.HTTP_400_BAD_REQUEST, upstream_status, payload)
        return cls("HTTP_ERROR", message, status.HTTP_502_BAD_GATEWAY, upstream_status, payload)


def _extract_message(payload: Any) -> str | None:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return None


@dataclass
class GatewayReply:
    """Successful (2xx) HTTP reply from a third-party API."""

    status_code: int
    data: Any

    @property
    def message(self) -> str | None:
        return _extract_message(self.data)


class BaseAPIClient:
    """
    Async HTTP client base with bearer auth, retries and error mapping.

    Subclasses are used as async context managers:

        async with PaystackClient() as client:
            data = await client.verify_transaction("ref")
    """

    error_class: type[GatewayError] = GatewayError

    MAX_RETRIES = 3
    BASE_DELAY = 0.5
    MAX_DELAY = 8.0

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30,
        retry_backoff: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._retry_backoff = self.BASE_DELAY if retry_backoff is None else retry_backoff
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self._timeout,
        )
        return self

    async def __aexit__(self, *args) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(f"{type(self).__name__} not initialized. Use 'async with'.")
        return self._client

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()

        if method.upper() != "GET":
            return await client.request(method, path, **kwargs)

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self.MAX_RETRIES),
            wait=wait_exponential(multiplier=self._retry_backoff, max=self.MAX_DELAY),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await client.request(method, path, **kwargs)

        raise RuntimeError("unreachable")

    async def _request(self, method: str, path: str, **kwargs: Any) -> GatewayReply:
        """
        Perform a request and return the parsed 2xx reply.

        Raises:
            GatewayError: TIMEOUT / CONNECTION_ERROR on transport failures,
                or the status-specific error for 4xx/5xx replies.
        """
        service = self.error_class.service_name
        try:
            response = await self._send(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{service} timeout on {method} {path}: {e}")
            raise self.error_class(
                "TIMEOUT", f"{service} request timed out", status.HTTP_504_GATEWAY_TIMEOUT
            ) from e
        except httpx.TransportError as e:
            logger.error(f"{service} connection error on {method} {path}: {e}")
            raise self.error_class("CONNECTION_ERROR", f"Could not connect to {service}: {e}") from e

        payload = self._parse_body(response)

        if response.status_code >= 400:
            logger.warning(f"{service} {method} {path} failed with {response.status_code}: {payload}")
            raise self.error_class.from_response(response.status_code, payload)

        return GatewayReply(status_code=response.status_code, data=payload)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
