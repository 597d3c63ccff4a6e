"""
Note Model.

Domain model for notes and its mapping from raw database rows.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from nodash.backend.core.utils import from_db_timestamp


@dataclass
class Note:
    """
    A single note.

    Rows store ``archived`` as 0/1 and timestamps as ISO-8601 text;
    ``from_row`` converts them to Python types.
    """

    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    archived: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Note":
        """Build a Note from a ``notes`` table row."""
        return cls(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            created_at=from_db_timestamp(row["created_at"]),
            updated_at=from_db_timestamp(row["updated_at"]),
            archived=bool(row["archived"]),
        )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, archived={self.archived})>"
