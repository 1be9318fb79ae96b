"""
Base schemas and common response models.
"""
from datetime import datetime
from typing import Generic, TypeVar, Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, field_validator


# Generic type for paginated responses
T = TypeVar("T")


def unique_in_order(values: list) -> list:
    """Drop repeated entries, keeping the first occurrence of each."""
    return list(dict.fromkeys(values))


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class FormSchema(BaseSchema):
    """
    Request body submitted from a form.

    Surrounding whitespace is stripped and blank optional text fields are
    stored as null.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value, info):
        field = cls.model_fields.get(info.field_name)
        if isinstance(value, str) and not value.strip() and field is not None and not field.is_required():
            return None
        return value


class TimestampSchema(BaseSchema):
    """Schema mixin for timestamps."""

    created_at: datetime
    updated_at: datetime


class IDSchema(BaseSchema):
    """Schema mixin for UUID ID."""

    id: UUID


class PaginatedResponse(BaseSchema, Generic[T]):
    """Generic paginated response."""

    items: List[T]
    total: int
    page: int
    limit: int
    pages: int


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str


class ErrorResponse(BaseSchema):
    """Error response format."""

    error: str
    message: str
    details: Optional[dict] = None
