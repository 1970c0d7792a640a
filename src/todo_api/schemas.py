from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def format_timestamp(value: datetime) -> str:
    """
    Render a timestamp as ISO-8601 UTC with millisecond precision and a 'Z'
    suffix, e.g. '2026-01-31T13:45:00.123Z'. Naive values are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    The title is optional at the schema level so that a missing or blank
    title is reported by the store as "Title is required" (400) rather than
    as a generic request validation failure.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy milk"}})

    title: Optional[str] = Field(default=None, description="Title of the todo item; must not be blank")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.

    Only the title can be updated. When the key is present with a string
    value it replaces the current title as-is; an absent key or null leaves
    it unchanged.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy oat milk"}})

    title: Optional[str] = Field(default=None, description="New title for the todo item")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy milk",
                "completed": False,
                "createdAt": "2026-01-25T10:15:30.123Z",
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Title of the todo item")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp (ISO-8601, UTC)")

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """Error body returned for 400 and 404 responses."""

    error: str = Field(..., description="Human-readable error message")


# PUBLIC_INTERFACE
class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field("ok", description="Always 'ok' while the process serves requests")
