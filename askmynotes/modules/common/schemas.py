"""Shared Pydantic schema bases."""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API payloads, which use camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimestampSchema(CamelModel):
    """Schema mixin for records that expose creation and update times."""

    created_at: datetime = Field(description="When the record was created")
    updated_at: Optional[datetime] = Field(default=None, description="When the record was last updated")


def _coerce_identifier(value: Any) -> Any:
    """Clients send subject ids as numbers or strings; store them as strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


SubjectIdentifier = Annotated[
    str,
    BeforeValidator(_coerce_identifier),
    Field(min_length=1, max_length=255, description="Client-chosen subject identifier, unique per owner"),
]


class SuccessResponse(CamelModel):
    """Acknowledgement for mutations without a richer payload."""

    success: bool = True


class MessageResponse(CamelModel):
    """Human-readable acknowledgement."""

    message: str
