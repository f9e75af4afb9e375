from typing import Any
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings using Pydantic BaseSettings.
    Values are loaded automatically from the environment and `.env`.
    """

    # API Configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Marketplace API"
    PROJECT_DESCRIPTION: str = "Marketplace backend: listings, payments and shipment booking"
    VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = Field("*", description="Allowed CORS origins (comma separated)")
    CORS_MAX_AGE: int = Field(3600, description="Seconds browsers may cache a CORS preflight")

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("marketplace", description="Database name")
    DB_USER: str = Field("postgres", description="PostgreSQL user")
    DB_PASSWORD: str | None = Field(None, description="PostgreSQL password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(20, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(30, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every X seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout to obtain a pooled connection")

    # JWT Settings
    TOKEN_SECRET_KEY: str = Field(..., description="Secret used to sign user tokens")
    ADMIN_TOKEN_SECRET_KEY: str = Field(..., description="Secret used to sign admin tokens")
    TOKEN_EXPIRE_DAYS: int = Field(30, description="Lifetime of user and admin tokens in days")
    RESET_TOKEN_EXPIRE_MINUTES: int = Field(60, description="Lifetime of password reset tokens")

    # Paystack (payment gateway)
    PAYSTACK_BASE_URL: str = Field("https://api.paystack.co", description="Paystack API base URL")
    PAYSTACK_SECRET_KEY: str = Field(..., description="Paystack secret key")
    PAYSTACK_TIMEOUT: int = Field(30, description="Timeout for Paystack requests in seconds")
    PLATFORM_CHARGE_PERCENT: int = Field(20, description="Platform share of each split payment")

    # GoShiip (logistics)
    GOSHIIP_BASE_URL: str = Field(
        "https://delivery-staging.apiideraos.com/api/v2/token", description="GoShiip API base URL"
    )
    GOSHIIP_API_KEY: str = Field(..., description="GoShiip API key")
    GOSHIIP_USER_ID: str | None = Field(None, description="GoShiip platform user id used for bookings")
    GOSHIIP_TIMEOUT: int = Field(30, description="Timeout for GoShiip requests in seconds")

    # Cloudinary (image hosting)
    CLOUDINARY_CLOUD_NAME: str | None = Field(None, description="Cloudinary cloud name")
    CLOUDINARY_API_KEY: str | None = Field(None, description="Cloudinary API key")
    CLOUDINARY_API_SECRET: str | None = Field(None, description="Cloudinary API secret")

    # Email
    EMAIL_HOST: str = Field("smtp.gmail.com", description="SMTP host")
    EMAIL_PORT: int = Field(587, description="SMTP port")
    EMAIL_USERNAME: str | None = Field(None, description="SMTP username and sender address")
    EMAIL_PASSWORD: str | None = Field(None, description="SMTP password")
    FRONTEND_URL: str = Field("http://localhost:3000", description="Frontend base URL used in emails")

    # File Upload Settings
    MAX_FILE_SIZE: int = Field(10 * 1024 * 1024, description="Maximum upload size in bytes (10MB)")

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    PORT: int = Field(5000, description="Port used when running the app directly")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(default=None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("PLATFORM_CHARGE_PERCENT")
    @classmethod
    def validate_platform_charge(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("PLATFORM_CHARGE_PERCENT must be between 0 and 100")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        return v

    @computed_field
    @property
    def database_url(self) -> str:
        """PostgreSQL connection URL (sync driver, used by Alembic)."""
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            password = quote_plus(self.DB_PASSWORD)
            return f"postgresql://{user}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql://{user}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Allowed origins parsed from CORS_ORIGINS."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @computed_field
    @property
    def is_development(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    @computed_field
    @property
    def cloudinary_enabled(self) -> bool:
        return bool(self.CLOUDINARY_CLOUD_NAME and self.CLOUDINARY_API_KEY and self.CLOUDINARY_API_SECRET)


# Settings singleton
_settings_instance = None


def get_settings() -> Settings:
    """
    Return a cached settings instance.
    Avoids reading the environment more than once.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
