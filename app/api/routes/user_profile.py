"""
Profile and bank endpoints for the signed-in user.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from app.api.dependencies import (
    get_banks,
    get_current_user,
    get_image_host,
    get_paystack_client,
    get_user_repository,
)
from app.api.responses import api_response
from app.clients.image_host_client import ImageHostClient
from app.clients.paystack_client import PaystackClient
from app.core.exceptions import BadRequestError
from app.models.db.user import UserDB
from app.repositories.user_repository import UserRepository
from app.services.bank_service import BankDirectory

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profile")
async def get_profile(user: UserDB = Depends(get_current_user)):  # noqa: B008
    return api_response("Profile retrieved successfully", user.to_dict())


@router.put("/profile")
async def update_profile(
    full_name: Optional[str] = Form(None, alias="fullName"),
    username: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None, alias="phoneNumber"),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    account_name: Optional[str] = Form(None, alias="accountName"),
    bank_name: Optional[str] = Form(None, alias="bankName"),
    account_number: Optional[str] = Form(None, alias="accountNumber"),
    image: Optional[UploadFile] = File(None),  # noqa: B008
    user: UserDB = Depends(get_current_user),  # noqa: B008
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
    image_host: ImageHostClient = Depends(get_image_host),  # noqa: B008
):
    """
    Update the profile (multipart form).

    The profile becomes verified once account name, bank name and account
    number are all present.
    """
    if not full_name or not username:
        raise BadRequestError("Please provide all required fields")

    submitted = {
        "full_name": full_name,
        "username": username,
        "phone_number": phone_number,
        "address": address,
        "city": city,
        "state": state,
        "country": country,
        "bio": bio,
        "account_name": account_name,
        "bank_name": bank_name,
        "account_number": account_number,
    }
    # omitted form fields keep their stored value
    fields = {key: value for key, value in submitted.items() if value is not None}

    if image is not None and image.filename:
        fields["profile_picture"] = await image_host.upload_image(await image.read())

    if account_name and bank_name and account_number:
        fields["is_verified"] = True

    updated = await users.update(user, **fields)
    logger.info(f"Profile updated for {updated.username} (verified={updated.is_verified})")
    return api_response("Profile updated successfully", updated.to_dict())


@router.get("/banks")
async def list_banks(banks: BankDirectory = Depends(get_banks)):  # noqa: B008
    return api_response("Banks retrieved successfully", await banks.get_banks())


@router.get("/resolve-account")
async def resolve_account(
    account_number: Optional[str] = Query(None),
    bank_code: Optional[str] = Query(None),
    paystack: PaystackClient = Depends(get_paystack_client),  # noqa: B008
):
    if not account_number or not bank_code:
        raise BadRequestError("Account number and bank code are required")

    result = await paystack.resolve_account(account_number, bank_code)
    return api_response("Account resolved successfully", result)
