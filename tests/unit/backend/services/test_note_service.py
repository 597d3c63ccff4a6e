"""
Unit Tests for Note Service.

Tests the NoteService business logic with a mocked repository.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from nodash.backend.core.exceptions import DatabaseError, NotFoundError
from nodash.backend.core.pagination import PagedResult
from nodash.backend.schemas.note import NoteCreate, NoteUpdate
from nodash.backend.services.note import NoteService


@pytest.fixture
def mock_repo():
    """Create mock note repository."""
    return AsyncMock()


@pytest.fixture
def service(mock_repo):
    """Create NoteService with mocked repository."""
    return NoteService(mock_repo)


class TestNoteServiceCreate:
    """Tests for note creation."""

    @pytest.mark.asyncio
    async def test_create_note_success(self, service, mock_repo):
        """Should create a note with title and content."""
        mock_note = MagicMock()
        mock_note.id = "note-123"
        mock_repo.create_note.return_value = mock_note

        data = NoteCreate(title="Test Note", content="Test content")
        result = await service.create_note(data)

        mock_repo.create_note.assert_called_once_with(
            title="Test Note",
            content="Test content",
        )
        assert result.id == "note-123"

    @pytest.mark.asyncio
    async def test_create_note_without_content(self, service, mock_repo):
        """Should pass an empty content string."""
        mock_repo.create_note.return_value = MagicMock(id="note-456")

        await service.create_note(NoteCreate(title="Title Only"))

        mock_repo.create_note.assert_called_once_with(title="Title Only", content="")


class TestNoteServiceGet:
    """Tests for getting notes."""

    @pytest.mark.asyncio
    async def test_get_note_success(self, service, mock_repo):
        """Should return note when found."""
        mock_repo.get_note_by_id.return_value = MagicMock(id="note-123")

        result = await service.get_note("note-123")

        assert result.id == "note-123"

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, service, mock_repo):
        """Should raise NotFoundError naming the id."""
        mock_repo.get_note_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_note("missing")

        assert exc_info.value.message == "Note with id 'missing' not found"


class TestNoteServiceUpdate:
    """Tests for updating notes."""

    @pytest.mark.asyncio
    async def test_update_passes_only_given_fields(self, service, mock_repo):
        """Should forward only non-null fields."""
        mock_repo.update_note.return_value = MagicMock(id="note-123")

        await service.update_note("note-123", NoteUpdate(archived=True))

        mock_repo.update_note.assert_called_once_with("note-123", archived=True)

    @pytest.mark.asyncio
    async def test_update_not_found(self, service, mock_repo):
        """Should raise NotFoundError when the repository finds nothing."""
        mock_repo.update_note.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_note("missing", NoteUpdate(title="x"))


class TestNoteServiceDelete:
    """Tests for deleting notes."""

    @pytest.mark.asyncio
    async def test_delete_success(self, service, mock_repo):
        """Should return the deleted note."""
        mock_repo.delete_note.return_value = MagicMock(id="note-123")

        result = await service.delete_note("note-123")

        assert result.id == "note-123"

    @pytest.mark.asyncio
    async def test_delete_not_found(self, service, mock_repo):
        """Should raise NotFoundError when nothing was deleted."""
        mock_repo.delete_note.return_value = None

        with pytest.raises(NotFoundError):
            await service.delete_note("missing")


class TestNoteServiceQueries:
    """Tests for listing and search."""

    @pytest.mark.asyncio
    async def test_list_forwards_arguments(self, service, mock_repo):
        """Should pass filters, paging and sort through."""
        page = PagedResult(items=[], total=0, limit=10, offset=5)
        mock_repo.get_notes.return_value = page

        result = await service.list_notes(
            archived=True, limit=10, offset=5, sort_by="title", sort_order="asc"
        )

        assert result is page
        mock_repo.get_notes.assert_called_once_with(
            archived=True, limit=10, offset=5, sort_by="title", sort_order="asc"
        )

    @pytest.mark.asyncio
    async def test_search_forwards_arguments(self, service, mock_repo):
        """Should pass the query and paging through."""
        mock_repo.search_notes.return_value = PagedResult(items=[], total=0, limit=50, offset=0)

        await service.search_notes("soup")

        mock_repo.search_notes.assert_called_once_with("soup", limit=50, offset=0)

    @pytest.mark.asyncio
    async def test_storage_errors_propagate(self, service, mock_repo):
        """Should not swallow storage failures."""
        mock_repo.get_notes.side_effect = DatabaseError("locked")

        with pytest.raises(DatabaseError):
            await service.list_notes()
