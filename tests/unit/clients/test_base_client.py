"""
Unit tests for the shared HTTP client plumbing: error mapping and retries.
"""

import httpx
import pytest

from app.clients.base import GatewayError
from app.clients.paystack_client import PaystackClient, PaystackError

BASE_URL = "https://api.paystack.test"


def make_client(handler) -> PaystackClient:
    client = PaystackClient(secret_key="sk_test", base_url=BASE_URL, retry_backoff=0)
    client._client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return client


@pytest.mark.unit
@pytest.mark.parametrize(
    "upstream_status, error_code, status_code",
    [
        (401, "AUTH_ERROR", 401),
        (404, "NOT_FOUND", 404),
        (429, "RATE_LIMITED", 429),
        (422, "VALIDATION_ERROR", 400),
        (400, "VALIDATION_ERROR", 400),
        (500, "HTTP_ERROR", 502),
        (503, "HTTP_ERROR", 502),
    ],
)
def test_from_response_maps_status(upstream_status, error_code, status_code):
    error = GatewayError.from_response(upstream_status, {"message": "upstream says no"})

    assert error.error_code == error_code
    assert error.status_code == status_code
    assert error.upstream_status == upstream_status
    assert error.message == "upstream says no"


@pytest.mark.unit
def test_from_response_without_message_uses_status():
    error = PaystackError.from_response(500, "<html>oops</html>")

    assert error.message == "Paystack request failed with status 500"
    assert isinstance(error, PaystackError)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_retries_transport_errors_then_succeeds():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={"status": True, "data": [{"name": "Access Bank"}]})

    client = make_client(handler)
    banks = await client.list_banks()

    assert banks == [{"name": "Access Bank"}]
    assert len(calls) == 3


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_gives_up_after_max_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(PaystackError) as exc_info:
        await client.list_banks()

    assert exc_info.value.error_code == "CONNECTION_ERROR"
    assert exc_info.value.status_code == 502
    assert len(calls) == PaystackClient.MAX_RETRIES


@pytest.mark.unit
@pytest.mark.asyncio
async def test_post_is_never_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection reset", request=request)

    client = make_client(handler)
    with pytest.raises(PaystackError) as exc_info:
        await client.create_subaccount("Ada Stores", "044", "0123456789", 80)

    assert exc_info.value.error_code == "CONNECTION_ERROR"
    assert len(calls) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_timeout_maps_to_gateway_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    client = make_client(handler)
    with pytest.raises(PaystackError) as exc_info:
        await client.initialize_transaction("ada@example.com", 10000, "ACCT_1", 2000)

    assert exc_info.value.error_code == "TIMEOUT"
    assert exc_info.value.status_code == 504


@pytest.mark.unit
@pytest.mark.asyncio
async def test_http_error_status_raises_mapped_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"status": False, "message": "Invalid key"})

    client = make_client(handler)
    with pytest.raises(PaystackError) as exc_info:
        await client.verify_transaction("ref_123")

    assert exc_info.value.error_code == "AUTH_ERROR"
    assert exc_info.value.message == "Invalid key"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_outside_context_manager_fails():
    client = PaystackClient(secret_key="sk_test", base_url=BASE_URL)

    with pytest.raises(RuntimeError, match="not initialized"):
        await client.list_banks()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_context_manager_sets_bearer_auth():
    async with PaystackClient(secret_key="sk_test", base_url=BASE_URL) as client:
        assert client._client.headers["Authorization"] == "Bearer sk_test"
        assert client._client.headers["Content-Type"] == "application/json"

    assert client._client is None
