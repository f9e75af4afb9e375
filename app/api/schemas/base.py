"""
Shared base for request schemas.

Clients send camelCase JSON; Python code reads snake_case attributes.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def require(model: BaseModel, fields: tuple[str, ...], message: str) -> None:
    """Raise ValueError(message) when any of `fields` is missing or blank."""
    if any(is_blank(getattr(model, name)) for name in fields):
        raise ValueError(message)
