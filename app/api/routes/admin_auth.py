"""
Admin login and dashboard.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_admin_repository, get_current_admin, get_token_service
from app.api.responses import api_response
from app.api.schemas.admin import AdminLoginRequest
from app.core.exceptions import UnauthorizedError
from app.models.db.user import AdminDB
from app.repositories.user_repository import AdminRepository
from app.services.token_service import TokenService

router = APIRouter()
dashboard_router = APIRouter()


@router.post("/login")
async def admin_login(
    request: AdminLoginRequest,
    admins: AdminRepository = Depends(get_admin_repository),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
):
    admin = await admins.get_by_email(request.email)
    if admin is None or not tokens.verify_password(request.password, admin.password_hash):
        raise UnauthorizedError("Invalid email or password")

    return api_response(
        "Login successful",
        {"_id": str(admin.id), "email": admin.email, "token": tokens.create_admin_token(admin.id)},
    )


@dashboard_router.get("/dashboard")
async def dashboard(admin: AdminDB = Depends(get_current_admin)):  # noqa: B008
    return api_response(f"Welcome {admin.email}, this is your dashboard")
