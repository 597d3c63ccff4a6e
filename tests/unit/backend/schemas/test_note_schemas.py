"""
Unit Tests for Note Schemas.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from nodash.backend.models.note import Note
from nodash.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate


class TestNoteCreate:
    """Tests for NoteCreate."""

    def test_content_defaults_to_empty(self):
        assert NoteCreate(title="t").content == ""

    @pytest.mark.parametrize("title", ["", "x" * 256])
    def test_title_length_bounds(self, title):
        with pytest.raises(ValidationError):
            NoteCreate(title=title)

    def test_title_max_length_accepted(self):
        assert NoteCreate(title="x" * 255).title == "x" * 255


class TestNoteUpdate:
    """Tests for NoteUpdate."""

    def test_requires_a_field(self):
        """Should reject an update with nothing to change."""
        with pytest.raises(ValidationError, match="At least one field"):
            NoteUpdate()

    def test_all_null_rejected(self):
        with pytest.raises(ValidationError):
            NoteUpdate(title=None, content=None, archived=None)

    def test_empty_content_is_a_change(self):
        """Should accept clearing the content."""
        assert NoteUpdate(content="").model_dump(exclude_none=True) == {"content": ""}


class TestNoteResponse:
    """Tests for NoteResponse serialization."""

    def test_camel_case_output(self):
        """Should expose createdAt/updatedAt from a Note."""
        now = datetime(2024, 5, 1, 12, 0, 0, 123456)
        note = Note(
            id="abc",
            title="T",
            content="C",
            created_at=now,
            updated_at=now,
            archived=False,
        )

        data = NoteResponse.model_validate(note).model_dump(mode="json", by_alias=True)

        assert data == {
            "id": "abc",
            "title": "T",
            "content": "C",
            "createdAt": "2024-05-01T12:00:00.123456Z",
            "updatedAt": "2024-05-01T12:00:00.123456Z",
            "archived": False,
        }


class TestNoteModel:
    """Tests for Note.from_row."""

    def test_from_row_converts_types(self):
        """Should convert 0/1 and ISO text into Python values."""
        note = Note.from_row({
            "id": "abc",
            "title": "T",
            "content": "",
            "created_at": "2024-05-01T12:00:00.000001",
            "updated_at": "2024-05-01T12:00:01.000000Z",
            "archived": 1,
        })

        assert note.archived is True
        assert note.created_at == datetime(2024, 5, 1, 12, 0, 0, 1)
        assert note.updated_at == datetime(2024, 5, 1, 12, 0, 1)
        assert note.updated_at.tzinfo is None
