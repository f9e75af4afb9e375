from pydantic import model_validator

from app.api.schemas.base import CamelModel, require


class NotificationCreateRequest(CamelModel):
    message: str | None = None
    user_id: str | None = None

    @model_validator(mode="after")
    def check_fields(self) -> "NotificationCreateRequest":
        require(self, ("message", "user_id"), "Message and userId are required")
        return self
