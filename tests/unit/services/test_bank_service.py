"""
Unit tests for the cached bank directory.
"""

from unittest.mock import AsyncMock

import pytest

from app.clients.paystack_client import PaystackError
from app.services.bank_service import BankDirectory

BANKS = [
    {"name": "Access Bank", "code": "044"},
    {"name": "Guaranty Trust Bank", "code": "058"},
]


@pytest.fixture
def client():
    mock = AsyncMock()
    mock.__aenter__.return_value = mock
    mock.list_banks.return_value = BANKS
    return mock


@pytest.fixture
def directory(client) -> BankDirectory:
    return BankDirectory(client_factory=lambda: client)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_refresh_caches_banks(directory, client):
    assert await directory.refresh() == BANKS
    assert directory.banks == BANKS

    await directory.get_banks()
    client.list_banks.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_cache(directory, client):
    await directory.refresh()
    client.list_banks.side_effect = PaystackError("CONNECTION_ERROR", "Could not connect to Paystack")

    assert await directory.refresh() == BANKS


@pytest.mark.unit
@pytest.mark.asyncio
async def test_empty_cache_is_refetched(directory, client):
    client.list_banks.side_effect = [PaystackError("TIMEOUT", "Paystack request timed out", 504), BANKS]

    await directory.refresh()
    assert directory.banks == []

    assert await directory.get_banks() == BANKS
    assert client.list_banks.await_count == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_find_by_name_is_case_insensitive(directory):
    bank = await directory.find_by_name("  guaranty TRUST bank ")

    assert bank == {"name": "Guaranty Trust Bank", "code": "058"}
    assert await directory.find_by_name("Unknown Bank") is None
