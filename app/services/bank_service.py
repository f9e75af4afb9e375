"""
In-process cache of the banks supported by the payment gateway.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from app.clients.paystack_client import PaystackClient, PaystackError

logger = logging.getLogger(__name__)


class BankDirectory:
    """
    Caches the Paystack bank list.

    The list is warmed at startup and refetched whenever it is empty, so a
    failed warm-up is recovered on the next request.
    """

    def __init__(self, client_factory: Callable[[], PaystackClient] = PaystackClient):
        self._client_factory = client_factory
        self._banks: list[dict[str, Any]] = []
        self._lock = asyncio.Lock()

    @property
    def banks(self) -> list[dict[str, Any]]:
        return list(self._banks)

    async def refresh(self) -> list[dict[str, Any]]:
        """Fetch the bank list; keeps the previous cache when the gateway fails."""
        async with self._lock:
            try:
                async with self._client_factory() as client:
                    self._banks = await client.list_banks()
                logger.info(f"Bank list cached ({len(self._banks)} banks)")
            except PaystackError as e:
                logger.error(f"Error fetching bank list: {e.message}")
        return self.banks

    async def get_banks(self) -> list[dict[str, Any]]:
        if not self._banks:
            logger.warning("Bank list not available, fetching...")
            await self.refresh()
        return self.banks

    async def find_by_name(self, name: str) -> Optional[dict[str, Any]]:
        """Case-insensitive lookup by bank name."""
        wanted = name.strip().lower()
        for bank in await self.get_banks():
            if str(bank.get("name", "")).lower() == wanted:
                return bank
        return None


_bank_directory: Optional[BankDirectory] = None


def get_bank_directory() -> BankDirectory:
    global _bank_directory
    if _bank_directory is None:
        _bank_directory = BankDirectory()
    return _bank_directory
