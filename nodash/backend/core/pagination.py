"""
Pagination Utilities.

Offset-based pagination for list endpoints.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from nodash.backend.schemas.base import PaginatedResponse

T = TypeVar("T")


@dataclass
class PagedResult(Generic[T]):
    """
    Result container for paginated queries.

    ``total`` counts every row matching the query's filter,
    not just the returned page.
    """

    items: list[T]
    total: int
    limit: int
    offset: int


def create_paginated_response(
    result: PagedResult[Any],
    item_schema: type[BaseModel],
    **extra: Any,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Args:
        result: Paged query result
        item_schema: Pydantic schema to validate items
        **extra: Additional top-level fields (e.g. ``query`` for search)

    Returns:
        Dict matching PaginatedResponse structure

    Usage:
        return create_paginated_response(result, NoteResponse, query=q)
    """
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json", by_alias=True)
        for item in result.items
    ]

    response = PaginatedResponse(
        data=validated_items,
        total=result.total,
        limit=result.limit,
        offset=result.offset,
    )

    return {**response.model_dump(mode="json"), **extra}
