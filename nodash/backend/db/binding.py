"""
Database Binding Interface.

Common interface over the SQL backends the repository can run on.
Statements use positional ``?`` placeholders and rows come back as
plain dicts keyed by column name.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

Row = dict[str, Any]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a statement executed with ``run``."""

    changes: int


class DbBinding(ABC):
    """
    Backend adapter used by repositories.

    Implementations pass reads and writes straight through to their
    engine. Whether ``transaction`` is a real transaction depends on
    the backend.
    """

    name: str = "unknown"

    @abstractmethod
    async def all(self, sql: str, *params: Any) -> list[Row]:
        """Run a query and return every row."""

    @abstractmethod
    async def get(self, sql: str, *params: Any) -> Row | None:
        """Run a query and return the first row, or None."""

    @abstractmethod
    async def run(self, sql: str, *params: Any) -> RunResult:
        """Execute a statement and report the number of changed rows."""

    @abstractmethod
    async def transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Await ``fn`` inside a transaction where supported."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying handle."""


def normalize_params(params: tuple[Any, ...]) -> list[Any]:
    """Convert Python values to the types SQLite stores (bool -> 0/1)."""
    return [int(p) if isinstance(p, bool) else p for p in params]
