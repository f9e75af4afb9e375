"""
Pydantic schemas for logistics (GoShiip relay) endpoints.
"""

import re
from typing import Any

from pydantic import model_validator

from app.api.schemas.base import CamelModel, is_blank, require

PHONE_PATTERN = re.compile(r"0\d{10}")
EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)


class RateRequest(CamelModel):
    """
    Single-courier rate quote.

    Addresses and items are forwarded to GoShiip unchanged; `parcels` must be
    present but is replaced by the constant parcel.
    """

    carrier_name: str | None = None
    type: str | None = None
    to_address: dict[str, Any] | None = None
    from_address: dict[str, Any] | None = None
    parcels: Any = None
    items: list[Any] | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "RateRequest":
        require(
            self,
            ("carrier_name", "type", "to_address", "from_address", "parcels", "items"),
            "Missing required fields",
        )

        to_address = self.to_address or {}
        if is_blank(to_address.get("name")):
            raise ValueError("Name is required.")
        if not PHONE_PATTERN.fullmatch(str(to_address.get("phone") or "")):
            raise ValueError("Invalid phone number. Please enter 11 digits starting with 0.")
        if not EMAIL_PATTERN.fullmatch(str(to_address.get("email") or "")):
            raise ValueError("Invalid email address")
        if is_blank(to_address.get("address")):
            raise ValueError("Address is required.")
        return self
