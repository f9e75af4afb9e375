"""
Pydantic schemas for product endpoints.
"""

from typing import Annotated

from pydantic import AfterValidator, Field, field_validator

from app.api.schemas.base import CamelModel


class ProductCreateRequest(CamelModel):
    """
    New listing (sale or donation).

    `images` is a ", "-separated list of image URLs. Listing rules (required
    fields, image count, video requirement) are enforced by ProductService.
    """

    title: str | None = None
    description: str | None = None
    category: str | None = None
    price: float | None = None
    price_category: str | None = None
    location: str | None = None
    uploader: str | None = None
    primary_image_index: int | None = None
    specification: str | None = None
    condition: str | None = None
    images: str | None = None
    video: str | None = None


def _min_length(label: str):
    def check(value: str | None) -> str | None:
        if value is not None and len(value) < 3:
            raise ValueError(f"'{label}' must be 3 or more characters")
        return value

    return AfterValidator(check)


class MyProductUpdateRequest(CamelModel):
    """Seller edit of their own listing."""

    title: Annotated[str | None, _min_length("Title")] = None
    description: Annotated[str | None, _min_length("Description")] = None
    price: float | None = Field(None, ge=0, validate_default=True)

    @field_validator("price", mode="before")
    @classmethod
    def require_price(cls, value):
        if value is None or value == "":
            raise ValueError("'Price' is required")
        return value


class ProductStatusRequest(CamelModel):
    status: str | None = None
