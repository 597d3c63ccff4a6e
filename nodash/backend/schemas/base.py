"""
Base Schemas.

Standard API response schemas shared by all endpoints.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for schemas exposed with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ValidationErrorDetail(BaseModel):
    """A single field-level validation failure."""

    field: str
    message: str
    type: str


class ErrorResponse(CamelModel):
    """Standard error response body: ``{error, message, statusCode}``."""

    error: str = Field(description="Error name", examples=["NotFound"])
    message: str = Field(description="Human-readable description")
    status_code: int = Field(description="HTTP status code", examples=[404])
    details: list[ValidationErrorDetail] | None = Field(
        default=None,
        description="Field errors (validation failures only)",
    )


class PaginatedResponse(BaseModel, Generic[DataT]):
    """Offset-paginated list response."""

    data: list[DataT]
    total: int
    limit: int
    offset: int


class StatusResponse(BaseModel):
    """Service identity returned from the root path."""

    name: str
    version: str
    status: str = "operational"


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI ``responses`` entries documenting the error body."""
    return {code: {"model": ErrorResponse} for code in status_codes}
