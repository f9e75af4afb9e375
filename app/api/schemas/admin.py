from pydantic import EmailStr, Field

from app.api.schemas.base import CamelModel


class AdminLoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=3)
