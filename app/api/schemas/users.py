"""
Pydantic schemas for account endpoints.
"""

from pydantic import model_validator

from app.api.schemas.base import CamelModel, require


class RegisterRequest(CamelModel):
    """Request to create an account."""

    full_name: str | None = None
    username: str | None = None
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "RegisterRequest":
        require(
            self,
            ("full_name", "username", "email", "password", "confirm_password"),
            "Please provide all fields.",
        )
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "LoginRequest":
        require(self, ("email", "password"), "Please provide email and password")
        return self


class ForgotPasswordRequest(CamelModel):
    email: str | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "ForgotPasswordRequest":
        require(self, ("email",), "Please provide an email address.")
        return self


class ResetPasswordRequest(CamelModel):
    token: str | None = None
    password: str | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "ResetPasswordRequest":
        require(self, ("token", "password"), "Please provide the reset token and a new password.")
        return self
