"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests run against an in-memory SQLite binding with the full notes
    schema (table, FTS index, triggers) created fresh for every test.
"""

from collections.abc import AsyncGenerator

import pytest

from nodash.backend.db.sqlite import SqliteBinding
from nodash.backend.repositories.note import NoteRepository


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def sqlite_binding() -> AsyncGenerator[SqliteBinding, None]:
    """
    Provide an empty in-memory SQLite binding.

    Each test gets its own database; nothing leaks between tests.
    """
    binding = SqliteBinding(":memory:", journal_mode="MEMORY")
    yield binding
    await binding.close()


@pytest.fixture
async def note_repo(sqlite_binding: SqliteBinding) -> NoteRepository:
    """
    Provide a NoteRepository over a database with the schema applied.

    Usage:
        async def test_create(note_repo: NoteRepository):
            note = await note_repo.create_note("Title")
            assert note.archived is False
    """
    repo = NoteRepository(sqlite_binding)
    await repo.init_schema()
    return repo
