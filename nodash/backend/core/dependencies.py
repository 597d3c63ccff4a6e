"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends

from nodash.backend.core.database import get_note_repository
from nodash.backend.repositories.note import NoteRepository

# Type alias for the note repository dependency
NoteRepo = Annotated[NoteRepository, Depends(get_note_repository)]
