"""
Local SQLite Binding.

Synchronous file-backed engine built on SQLAlchemy over the stdlib
sqlite3 driver. One long-lived connection is held for the lifetime of
the binding; statements outside ``transaction`` commit immediately.
"""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from nodash.backend.core.exceptions import DatabaseError
from nodash.backend.core.logging import get_logger
from nodash.backend.db.binding import DbBinding, Row, RunResult, normalize_params

logger = get_logger(__name__)

T = TypeVar("T")

MEMORY_PATH = ":memory:"

JOURNAL_MODES = frozenset({"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"})


def _create_engine(path: str, journal_mode: str, echo: bool) -> Engine:
    """Create the engine and hook connection setup."""
    kwargs: dict[str, Any] = {
        "echo": echo,
        "connect_args": {"check_same_thread": False},
    }
    if path == MEMORY_PATH:
        # Every checkout must see the same in-memory database
        kwargs["poolclass"] = StaticPool

    engine = create_engine(f"sqlite:///{path}", **kwargs)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        # Let SQLAlchemy emit BEGIN itself instead of pysqlite's implicit one
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute(f"pragma journal_mode = {journal_mode}")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Connection) -> None:
        conn.exec_driver_sql("begin")

    return engine


class SqliteBinding(DbBinding):
    """
    Binding for a local SQLite database file (or ``:memory:``).

    ``transaction`` is a real transaction: commit on success, rollback on
    error. Nested calls join the outermost transaction.
    """

    name = "sqlite"

    def __init__(
        self,
        path: str,
        journal_mode: str = "WAL",
        echo: bool = False,
    ) -> None:
        journal_mode = journal_mode.upper()
        if journal_mode not in JOURNAL_MODES:
            raise ValueError(f"Unsupported journal mode: {journal_mode}")

        if path != MEMORY_PATH:
            Path(path).parent.mkdir(parents=True, exist_ok=True)

        self.path = path
        self._engine = _create_engine(path, journal_mode, echo)
        self._conn = self._engine.connect()
        self._depth = 0

        logger.debug("SQLite binding opened", extra={"path": path, "journal_mode": journal_mode})

    @property
    def in_transaction(self) -> bool:
        """Whether a ``transaction`` block is currently open."""
        return self._depth > 0

    def _execute(self, sql: str, params: tuple[Any, ...]) -> CursorResult:
        values = tuple(normalize_params(params))
        try:
            if values:
                return self._conn.exec_driver_sql(sql, values)
            return self._conn.exec_driver_sql(sql)
        except SQLAlchemyError as e:
            logger.error("SQLite statement failed", extra={"error": str(e)})
            if not self.in_transaction:
                self._conn.rollback()
            raise DatabaseError(f"SQLite statement failed: {e.__cause__ or e}") from e

    def _commit_unless_in_transaction(self) -> None:
        if not self.in_transaction:
            self._conn.commit()

    async def all(self, sql: str, *params: Any) -> list[Row]:
        result = self._execute(sql, params)
        rows = [dict(row) for row in result.mappings().all()]
        self._commit_unless_in_transaction()
        return rows

    async def get(self, sql: str, *params: Any) -> Row | None:
        rows = await self.all(sql, *params)
        return rows[0] if rows else None

    async def run(self, sql: str, *params: Any) -> RunResult:
        result = self._execute(sql, params)
        changes = max(result.rowcount, 0)
        self._commit_unless_in_transaction()
        return RunResult(changes=changes)

    async def transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        self._depth += 1
        try:
            result = await fn()
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._conn.rollback()
            raise

        self._depth -= 1
        if self._depth == 0:
            self._conn.commit()
        return result

    async def close(self) -> None:
        self._conn.close()
        self._engine.dispose()
        logger.debug("SQLite binding closed", extra={"path": self.path})
