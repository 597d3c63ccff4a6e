"""
Note Repository.

Data access layer for notes. Owns the SQL for the ``notes`` table and
its full-text index, and runs it through whichever DbBinding the
application was configured with.
"""

from itertools import product
from uuid import uuid4

from nodash.backend.core.exceptions import DatabaseError, ValidationError
from nodash.backend.core.logging import get_logger
from nodash.backend.core.pagination import PagedResult
from nodash.backend.core.utils import to_db_timestamp, utc_now
from nodash.backend.db.binding import DbBinding
from nodash.backend.models.note import Note
from nodash.backend.repositories.base import BaseRepository
from nodash.backend.repositories.schema import SCHEMA_STATEMENTS

logger = get_logger(__name__)

# API sort keys to column names. Only these are ever interpolated into SQL.
SORT_COLUMNS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
}
SORT_ORDERS = frozenset({"asc", "desc"})

# Trigram MATCH needs at least three characters
MIN_MATCH_LENGTH = 3


def fts_phrase(query: str) -> str:
    """Quote a user query as a single FTS5 phrase so operators are inert."""
    return '"' + query.replace('"', '""') + '"'


def like_pattern(query: str) -> str:
    """Build a ``LIKE`` substring pattern with wildcards escaped by ``\\``."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def case_variants(query: str) -> list[str]:
    """
    Spell a query every way that differs only in non-ASCII letter case.

    ``LIKE`` folds ASCII case only, while the trigram index folds Unicode
    case; short queries are matched against each variant instead.
    """
    choices = []
    for char in query:
        if char.isascii():
            choices.append([char])
        else:
            forms = {char, char.lower(), char.upper()}
            choices.append(sorted(form for form in forms if len(form) == 1))
    return ["".join(chars) for chars in product(*choices)]


class NoteRepository(BaseRepository[Note]):
    """
    Repository for notes.

    Search reads from ``notes_fts``, which only ever holds non-archived
    notes, so archived notes can never appear in results.
    """

    model = Note
    table = "notes"

    def __init__(self, binding: DbBinding) -> None:
        super().__init__(binding)

    async def init_schema(self) -> None:
        """Create the notes table, indexes, FTS table and triggers."""
        for statement in SCHEMA_STATEMENTS:
            await self.binding.run(statement)
        logger.info("Notes schema ready", extra={"backend": self.binding.name})

    async def get_notes(
        self,
        archived: bool = False,
        limit: int = 100,
        offset: int = 0,
        sort_by: str = "updatedAt",
        sort_order: str = "desc",
    ) -> PagedResult[Note]:
        """
        List notes with the given archived state.

        Args:
            archived: List archived notes instead of active ones
            limit: Maximum number of notes to return
            offset: Number of notes to skip
            sort_by: One of createdAt, updatedAt, title
            sort_order: asc or desc

        Returns:
            The page of notes and the total matching count

        Raises:
            ValidationError: If the sort field or order is unsupported
        """
        column = SORT_COLUMNS.get(sort_by)
        if column is None:
            raise ValidationError(f"Unsupported sort field: {sort_by}")
        order = sort_order.lower()
        if order not in SORT_ORDERS:
            raise ValidationError(f"Unsupported sort order: {sort_order}")

        notes = await self._fetch_all(
            f"""
            select * from "notes"
            where "archived" = ?
            order by "{column}" {order}, "rowid" {order}
            limit ? offset ?
            """,
            archived,
            limit,
            offset,
        )
        total = await self._count(
            'select count(*) as "count" from "notes" where "archived" = ?',
            archived,
        )
        return PagedResult(items=notes, total=total, limit=limit, offset=offset)

    async def get_note_by_id(self, note_id: str) -> Note | None:
        """Get a note by ID, or None."""
        return await self.get_by_id_or_none(note_id)

    async def create_note(self, title: str, content: str = "") -> Note:
        """Insert a new, non-archived note and return it."""
        now = to_db_timestamp(utc_now())
        note = await self._fetch_one(
            """
            insert into "notes" ("id", "title", "content", "created_at", "updated_at", "archived")
            values (?, ?, ?, ?, ?, 0)
            returning *
            """,
            str(uuid4()),
            title,
            content,
            now,
            now,
        )
        if note is None:
            raise DatabaseError("Insert did not return the new note")
        return note

    async def update_note(
        self,
        note_id: str,
        title: str | None = None,
        content: str | None = None,
        archived: bool | None = None,
    ) -> Note | None:
        """
        Update the given fields of a note.

        Fields left as None are not touched. ``updated_at`` always moves
        to now, but never backwards.

        Returns:
            The updated note, or None if it does not exist
        """

        async def _update() -> Note | None:
            existing = await self.get_by_id_or_none(note_id)
            if existing is None:
                return None

            assignments: list[str] = []
            params: list[object] = []
            if title is not None:
                assignments.append('"title" = ?')
                params.append(title)
            if content is not None:
                assignments.append('"content" = ?')
                params.append(content)
            if archived is not None:
                assignments.append('"archived" = ?')
                params.append(archived)

            updated_at = max(utc_now(), existing.updated_at)
            assignments.append('"updated_at" = ?')
            params.append(to_db_timestamp(updated_at))

            return await self._fetch_one(
                f"""
                update "notes"
                set {", ".join(assignments)}
                where "id" = ?
                returning *
                """,
                *params,
                note_id,
            )

        return await self.transaction(_update)

    async def delete_note(self, note_id: str) -> Note | None:
        """Delete a note permanently, returning the deleted row or None."""
        return await self._fetch_one(
            'delete from "notes" where "id" = ? returning *',
            note_id,
        )

    async def search_notes(
        self,
        query: str,
        limit: int = 50,
        offset: int = 0,
    ) -> PagedResult[Note]:
        """
        Full-text search over title and content of non-archived notes.

        Matching is a case-insensitive substring match. Queries of three or
        more characters use the trigram index and are ranked by relevance;
        shorter ones scan the index with ``LIKE`` and are ordered by
        most recently updated.
        """
        query = query.strip()
        if not query:
            return PagedResult(items=[], total=0, limit=limit, offset=offset)

        if len(query) >= MIN_MATCH_LENGTH:
            where = '"notes_fts" match ?'
            params: tuple[str, ...] = (fts_phrase(query),)
            order_by = '"rank"'
        else:
            patterns = [like_pattern(variant) for variant in case_variants(query)]
            where = " or ".join(
                "\"notes_fts\".\"title\" like ? escape '\\' "
                "or \"notes_fts\".\"content\" like ? escape '\\'"
                for _ in patterns
            )
            params = tuple(p for pattern in patterns for p in (pattern, pattern))
            order_by = '"n"."updated_at" desc'

        notes = await self._fetch_all(
            f"""
            select "n".*
            from "notes_fts"
            join "notes" "n" on "n"."rowid" = "notes_fts"."rowid"
            where {where}
            order by {order_by}
            limit ? offset ?
            """,
            *params,
            limit,
            offset,
        )
        total = await self._count(
            f"""
            select count(*) as "count"
            from "notes_fts"
            join "notes" "n" on "n"."rowid" = "notes_fts"."rowid"
            where {where}
            """,
            *params,
        )
        return PagedResult(items=notes, total=total, limit=limit, offset=offset)
