from pydantic import Field, model_validator

from app.api.schemas.base import CamelModel, require


class OrderCreateRequest(CamelModel):
    """New order. `amount` defaults to the product price."""

    product_id: str | None = None
    amount: float | None = Field(None, gt=0)

    @model_validator(mode="after")
    def check_fields(self) -> "OrderCreateRequest":
        require(self, ("product_id",), "Product ID is required")
        return self
