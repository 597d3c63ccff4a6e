"""
Note Schemas.

Pydantic schemas for note API request/response validation.
Field names are exposed in camelCase (``createdAt``, ``sortBy``).
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_serializer, model_validator

from nodash.backend.schemas.base import CamelModel, PaginatedResponse

TITLE_MAX_LENGTH = 255

LIST_DEFAULT_LIMIT = 100
LIST_MAX_LIMIT = 1000
SEARCH_DEFAULT_LIMIT = 50
SEARCH_MAX_LIMIT = 100

SortField = Literal["createdAt", "updatedAt", "title"]
SortOrder = Literal["asc", "desc"]


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
        examples=["My First Note"],
    )
    content: str = Field(
        default="",
        description="Note content",
        examples=["This is the content of my note."],
    )


class NoteUpdate(BaseModel):
    """
    Schema for updating an existing note.

    Any subset of fields may be given, but at least one must be non-null.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Note content",
    )
    archived: bool | None = Field(
        default=None,
        description="Archive status",
    )

    @model_validator(mode="after")
    def _require_one_field(self) -> "NoteUpdate":
        if self.title is None and self.content is None and self.archived is None:
            raise ValueError(
                "At least one field (title, content, or archived) must be provided"
            )
        return self


class NoteResponse(CamelModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")
    archived: bool = Field(description="Whether the note is archived")

    @field_serializer("created_at", "updated_at")
    def _serialize_utc(self, value: datetime) -> str:
        # Stored timestamps are naive UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class NoteListResponse(PaginatedResponse[NoteResponse]):
    """Paginated list of notes."""


class NoteSearchResponse(PaginatedResponse[NoteResponse]):
    """Paginated search results, echoing the query."""

    query: str
