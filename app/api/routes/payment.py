"""
Seller payout and split-payment endpoints (Paystack relay).
"""

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_banks, get_paystack_client, get_user_repository
from app.api.responses import api_response
from app.api.schemas.payments import InitializeTransactionRequest, SubaccountRequest
from app.clients.paystack_client import PaystackClient
from app.config.settings import get_settings
from app.core.exceptions import BadRequestError, NotFoundError
from app.repositories.user_repository import UserRepository
from app.services.bank_service import BankDirectory

logger = logging.getLogger(__name__)

router = APIRouter()

SPLIT_BEARER = "subaccount"


def platform_charge(amount: int, percent: int) -> int:
    """Platform share of a payment in kobo, rounded down."""
    return (amount * percent) // 100


@router.get("/seller/{seller_id}/bank-details")
async def seller_bank_details(
    seller_id: str,
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
):
    seller = await users.get_by_id(seller_id)
    if seller is None:
        raise NotFoundError("Seller not found.")
    if not seller.has_bank_details:
        raise BadRequestError("Incomplete bank details for the seller.")

    return api_response(
        "Bank details retrieved successfully",
        {
            "bankName": seller.bank_name,
            "accountNumber": seller.account_number,
            "accountName": seller.account_name,
        },
    )


@router.post("/subaccount", status_code=status.HTTP_201_CREATED)
async def create_subaccount(
    request: SubaccountRequest,
    banks: BankDirectory = Depends(get_banks),  # noqa: B008
    paystack: PaystackClient = Depends(get_paystack_client),  # noqa: B008
):
    """Create a Paystack subaccount; the bank is looked up by name."""
    bank = await banks.find_by_name(request.bank_name)
    if bank is None:
        raise NotFoundError("Bank not found. Please check the bank name.")

    result = await paystack.create_subaccount(
        business_name=request.business_name,
        bank_code=bank["code"],
        account_number=request.account_number,
        percentage_charge=request.percentage_charge,
    )
    return api_response("Subaccount created successfully", result, status.HTTP_201_CREATED)


@router.post("/initialize-transaction", status_code=status.HTTP_201_CREATED)
async def initialize_transaction(
    request: InitializeTransactionRequest,
    paystack: PaystackClient = Depends(get_paystack_client),  # noqa: B008
):
    """
    Start a split payment.

    The platform keeps PLATFORM_CHARGE_PERCENT of the amount and the seller
    subaccount bears the gateway fees. Metadata (order_id, rate_id,
    redis_key) comes back at verification time.
    """
    charge = platform_charge(request.amount, get_settings().PLATFORM_CHARGE_PERCENT)
    metadata = request.metadata.model_dump(exclude_none=True) if request.metadata else None

    result = await paystack.initialize_transaction(
        email=request.email,
        amount=request.amount,
        subaccount=request.seller_subaccount,
        transaction_charge=charge,
        bearer=SPLIT_BEARER,
        metadata=metadata,
    )
    logger.info(f"Transaction initialized for {request.email}: amount={request.amount}, charge={charge}")
    return api_response("Transaction initialized successfully", result, status.HTTP_201_CREATED)
