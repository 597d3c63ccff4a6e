"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Query, Response

from nodash.backend.core.dependencies import NoteRepo
from nodash.backend.core.pagination import create_paginated_response
from nodash.backend.schemas.base import error_responses
from nodash.backend.schemas.note import (
    LIST_DEFAULT_LIMIT,
    LIST_MAX_LIMIT,
    SEARCH_DEFAULT_LIMIT,
    SEARCH_MAX_LIMIT,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteSearchResponse,
    NoteUpdate,
    SortField,
    SortOrder,
)
from nodash.backend.services.note import NoteService

router = APIRouter()


@router.get("/", response_model=NoteListResponse, include_in_schema=False)
@router.get(
    "",
    response_model=NoteListResponse,
    summary="List notes",
    description="Get a sorted, paginated list of active or archived notes.",
    responses=error_responses(400, 500),
)
async def list_notes(
    repo: NoteRepo,
    archived: bool = Query(
        default=False,
        description="List archived notes instead of active ones",
    ),
    limit: int = Query(
        default=LIST_DEFAULT_LIMIT,
        ge=1,
        le=LIST_MAX_LIMIT,
        description="Maximum number of notes",
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of notes to skip",
    ),
    sort_by: SortField = Query(
        default="updatedAt",
        alias="sortBy",
        description="Sort field",
    ),
    sort_order: SortOrder = Query(
        default="desc",
        alias="sortOrder",
        description="Sort direction",
    ),
) -> dict[str, Any]:
    """List notes."""
    service = NoteService(repo)
    result = await service.list_notes(
        archived=archived,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return create_paginated_response(result, NoteResponse)


@router.get(
    "/search",
    response_model=NoteSearchResponse,
    summary="Search notes",
    description=(
        "Case-insensitive substring search over title and content. "
        "Archived notes are never returned."
    ),
    responses=error_responses(400, 500),
)
async def search_notes(
    repo: NoteRepo,
    q: str = Query(
        ...,
        min_length=1,
        description="Search query",
    ),
    limit: int = Query(
        default=SEARCH_DEFAULT_LIMIT,
        ge=1,
        le=SEARCH_MAX_LIMIT,
        description="Maximum number of results",
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of results to skip",
    ),
) -> dict[str, Any]:
    """Search notes."""
    service = NoteService(repo)
    result = await service.search_notes(q, limit=limit, offset=offset)
    return create_paginated_response(result, NoteResponse, query=q)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
    description="Get a single note by ID.",
    responses=error_responses(400, 404, 500),
)
async def get_note(note_id: UUID, repo: NoteRepo) -> NoteResponse:
    """Get a note by ID."""
    service = NoteService(repo)
    note = await service.get_note(str(note_id))
    return NoteResponse.model_validate(note)


@router.post("/", response_model=NoteResponse, status_code=201, include_in_schema=False)
@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a new note with a title and optional content.",
    responses=error_responses(400, 500),
)
async def create_note(data: NoteCreate, repo: NoteRepo) -> NoteResponse:
    """Create a new note."""
    service = NoteService(repo)
    note = await service.create_note(data)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
    responses=error_responses(400, 404, 500),
)
async def update_note(
    note_id: UUID,
    data: NoteUpdate,
    repo: NoteRepo,
) -> NoteResponse:
    """Update a note."""
    service = NoteService(repo)
    note = await service.update_note(str(note_id), data)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note.",
    responses=error_responses(400, 404, 500),
)
async def delete_note(note_id: UUID, repo: NoteRepo) -> Response:
    """Delete a note."""
    service = NoteService(repo)
    await service.delete_note(str(note_id))
    return Response(status_code=204)
