"""
API Router.

Aggregates all endpoint routers mounted under ``/api``.
"""

from fastapi import APIRouter

from nodash.backend.api.endpoints import notes

router = APIRouter()

# Notes endpoints
router.include_router(notes.router, prefix="/notes", tags=["notes"])
