"""
Account endpoints: registration, login and password reset.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import (
    get_email_service,
    get_product_repository,
    get_token_service,
    get_user_repository,
)
from app.api.responses import api_response
from app.api.schemas.users import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.config.settings import get_settings
from app.core.exceptions import AppError, BadRequestError, NotFoundError, UnauthorizedError
from app.repositories.product_repository import ProductRepository
from app.repositories.user_repository import UserRepository
from app.services.email_service import EmailService, reset_password_email
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
):
    """Create an account."""
    if await users.get_by_email(request.email):
        raise BadRequestError("Email already exists.")

    user = await users.create(
        full_name=request.full_name,
        username=request.username,
        email=request.email,
        password_hash=tokens.get_password_hash(request.password),
    )
    return api_response("User registered successfully", user.to_dict(), status.HTTP_201_CREATED)


@router.post("/login")
async def login(
    request: LoginRequest,
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
):
    user = await users.get_by_email(request.email)
    if user is None or not tokens.verify_password(request.password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")

    return api_response(
        "Login successful",
        {
            "_id": str(user.id),
            "fullName": user.full_name,
            "email": user.email,
            "token": tokens.create_user_token(user.id),
        },
    )


@router.post("/logout")
async def logout():
    """Tokens are stateless; the client discards its copy."""
    return api_response("User logged out")


@router.post("/forgot-password")
async def forgot_password(
    request: ForgotPasswordRequest,
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
    mailer: EmailService = Depends(get_email_service),  # noqa: B008
):
    """Store a one-hour reset token and email the reset link."""
    user = await users.get_by_email(request.email)
    if user is None:
        raise NotFoundError("User not found.")

    reset_token, expires = tokens.generate_reset_token()
    await users.update(user, reset_password_token=reset_token, reset_password_expires=expires)

    reset_url = f"{get_settings().FRONTEND_URL}/reset-password?token={reset_token}"
    result = await mailer.send_email(user.email, reset_password_email(reset_url), "Password Reset Request")
    if not result.success:
        raise AppError("Error sending email. Please try again.", status.HTTP_500_INTERNAL_SERVER_ERROR, result.message)

    return api_response("A reset link has been sent to your email address.")


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
):
    user = await users.get_by_reset_token(request.token)
    if user is None:
        raise BadRequestError("Invalid or expired token.")

    await users.update(
        user,
        password_hash=tokens.get_password_hash(request.password),
        reset_password_token=None,
        reset_password_expires=None,
    )
    return api_response("Password reset successful.")


@router.get("/message-profile")
async def message_profile(
    username: str | None = Query(None),
    users: UserRepository = Depends(get_user_repository),  # noqa: B008
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    """Public profile of a seller, with their listings."""
    user = await users.get_by_username(username) if username else None
    if user is None:
        raise NotFoundError("User not found")

    listings = await products.list_by_uploader(user.id)
    return api_response("Fetched", {**user.to_dict(), "products": [p.to_dict() for p in listings]})
