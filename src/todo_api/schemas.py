from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

TITLE_MAX_LENGTH = 200

# Error types raised by the validators below. The API layer reports their
# messages verbatim as {"error": <message>}.
FIELD_ERROR_TYPES = frozenset({"title_required", "title_type", "title_too_long", "completed_type"})


def _clean_title(value: Any) -> str:
    """
    Check that an incoming title is a string, strip surrounding whitespace and
    enforce the 1..200 length bounds on the stripped value.
    """
    if value is None:
        raise PydanticCustomError("title_required", "title is required")
    if not isinstance(value, str):
        raise PydanticCustomError("title_type", "title must be a string")
    s = value.strip()
    if not s:
        raise PydanticCustomError("title_required", "title is required")
    if len(s) > TITLE_MAX_LENGTH:
        raise PydanticCustomError("title_too_long", "title too long")
    return s


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Only the title is accepted; new todos always start with completed=false.
    Unknown keys (including 'completed') are ignored.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy milk"}})

    title: str = Field(
        default=None,
        validate_default=True,
        description="Short title for the todo item (1..200 characters after trimming)",
    )

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        return _clean_title(v)


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.

    Both fields are optional; only the keys present in the request body are
    applied. Presence is read from ``model_fields_set``, so an explicit null
    is treated as a present (and therefore invalid) value, never as "absent".
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy oat milk", "completed": True}}
    )

    title: Optional[str] = Field(default=None, description="New title (1..200 characters after trimming)")
    completed: Optional[bool] = Field(default=None, description="New completion flag (JSON boolean)")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        return _clean_title(v)

    @field_validator("completed", mode="before")
    @classmethod
    def validate_completed(cls, v: Any) -> bool:
        """
        Accept only real booleans. Numbers, strings and null are rejected
        rather than coerced.
        """
        if not isinstance(v, bool):
            raise PydanticCustomError("completed_type", "completed must be a boolean")
        return v

    # PUBLIC_INTERFACE
    def has_title(self) -> bool:
        return "title" in self.model_fields_set

    # PUBLIC_INTERFACE
    def has_completed(self) -> bool:
        return "completed" in self.model_fields_set

    # PUBLIC_INTERFACE
    def is_empty(self) -> bool:
        """True when neither title nor completed was supplied."""
        return not (self.has_title() or self.has_completed())


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy milk",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123456+00:00",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """Error body returned for 4xx/5xx responses."""

    error: str = Field(..., description="Human readable error message")


# PUBLIC_INTERFACE
class HealthOut(BaseModel):
    """Health probe result."""

    ok: bool
