"""
Pydantic schemas for payment endpoints.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.api.schemas.base import CamelModel, require


class TransactionMetadata(BaseModel):
    """
    Metadata attached to a payment and echoed back at verification.

    `order_id`, `rate_id` and `redis_key` link the payment to its order and
    to the shipment rate quoted at checkout. Other keys are passed through.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="allow")

    order_id: str | None = None
    rate_id: str | None = None
    redis_key: str | None = None


class SubaccountRequest(CamelModel):
    business_name: str | None = None
    bank_name: str | None = None
    account_number: str | None = None
    percentage_charge: float | None = Field(None, ge=0, le=100)

    @model_validator(mode="after")
    def check_fields(self) -> "SubaccountRequest":
        require(
            self,
            ("business_name", "bank_name", "account_number", "percentage_charge"),
            "Required fields are missing: businessName, bankName, accountNumber, percentageCharge",
        )
        return self


class InitializeTransactionRequest(CamelModel):
    """Split payment request. `amount` is in kobo."""

    email: str | None = None
    amount: int | None = Field(None, gt=0)
    seller_subaccount: str | None = None
    metadata: TransactionMetadata | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "InitializeTransactionRequest":
        require(
            self,
            ("email", "amount", "seller_subaccount"),
            "Required fields are missing: email, amount, sellerSubaccount",
        )
        return self
