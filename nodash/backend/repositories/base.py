"""
Base Repository.

Base class for repositories running raw SQL through a DbBinding.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Generic, Protocol, TypeVar

from nodash.backend.core.logging import get_logger
from nodash.backend.db.binding import DbBinding

logger = get_logger(__name__)

T = TypeVar("T")


class RowModel(Protocol):
    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Any: ...


ModelType = TypeVar("ModelType", bound=RowModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common lookups.

    Subclasses set the model class and table name:

        class NoteRepository(BaseRepository[Note]):
            model = Note
            table = "notes"
    """

    model: type[ModelType]
    table: str

    def __init__(self, binding: DbBinding) -> None:
        self.binding = binding

    async def transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` inside a binding transaction (a no-op on some backends)."""
        return await self.binding.transaction(fn)

    async def _fetch_all(self, sql: str, *params: Any) -> list[ModelType]:
        rows = await self.binding.all(sql, *params)
        return [self.model.from_row(row) for row in rows]

    async def _fetch_one(self, sql: str, *params: Any) -> ModelType | None:
        row = await self.binding.get(sql, *params)
        return self.model.from_row(row) if row else None

    async def _count(self, sql: str, *params: Any) -> int:
        row = await self.binding.get(sql, *params)
        return int(row["count"]) if row else 0

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        return await self._fetch_one(
            f'select * from "{self.table}" where "id" = ?',
            id,
        )

    async def ping(self) -> None:
        """Round-trip a trivial query to check the backend is reachable."""
        await self.binding.get('select 1 as "ok"')
