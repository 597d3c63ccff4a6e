"""
Note Service.

Business logic layer for notes. Turns missing notes into NotFoundError
and logs mutations; storage failures propagate unchanged.
"""

from nodash.backend.core.exceptions import NotFoundError
from nodash.backend.core.pagination import PagedResult
from nodash.backend.models.note import Note
from nodash.backend.repositories.note import NoteRepository
from nodash.backend.schemas.note import NoteCreate, NoteUpdate
from nodash.backend.services.base import BaseService


def _not_found(note_id: str) -> NotFoundError:
    return NotFoundError(f"Note with id '{note_id}' not found")


class NoteService(BaseService):
    """Service for note business logic."""

    def __init__(self, repo: NoteRepository) -> None:
        super().__init__()
        self.repo = repo

    async def list_notes(
        self,
        archived: bool = False,
        limit: int = 100,
        offset: int = 0,
        sort_by: str = "updatedAt",
        sort_order: str = "desc",
    ) -> PagedResult[Note]:
        """List active (or archived) notes, sorted and paginated."""
        return await self.repo.get_notes(
            archived=archived,
            limit=limit,
            offset=offset,
            sort_by=sort_by,
            sort_order=sort_order,
        )

    async def search_notes(
        self,
        query: str,
        limit: int = 50,
        offset: int = 0,
    ) -> PagedResult[Note]:
        """Search non-archived notes by title and content."""
        self._log_debug("Searching notes", query=query)
        return await self.repo.search_notes(query, limit=limit, offset=offset)

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.repo.get_note_by_id(note_id)
        if note is None:
            raise _not_found(note_id)
        return note

    async def create_note(self, data: NoteCreate) -> Note:
        """Create a new note."""
        self._log_operation("Creating note", title=data.title)

        note = await self.repo.create_note(title=data.title, content=data.content)

        self._log_debug("Note created", note_id=note.id)
        return note

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Update an existing note.

        Only fields given a non-null value are written.

        Raises:
            NotFoundError: If note not found
        """
        update_data = data.model_dump(exclude_none=True)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        note = await self.repo.update_note(note_id, **update_data)
        if note is None:
            raise _not_found(note_id)
        return note

    async def delete_note(self, note_id: str) -> Note:
        """
        Delete a note permanently.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note", note_id=note_id)

        note = await self.repo.delete_note(note_id)
        if note is None:
            raise _not_found(note_id)
        return note
