"""
Cloudflare D1 Binding.

Remote SQLite-compatible database reached over the Cloudflare REST API.
Every statement is one ``POST .../query`` request authenticated with an
API token.

The HTTP API has no interactive transactions, so ``transaction`` simply
awaits the callable.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from nodash.backend.core.exceptions import DatabaseError
from nodash.backend.core.logging import get_logger
from nodash.backend.db.binding import DbBinding, Row, RunResult, normalize_params

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"


class D1Binding(DbBinding):
    """
    Binding for a Cloudflare D1 database.

    Args:
        account_id: Cloudflare account identifier
        database_id: D1 database identifier
        api_token: API token with D1 edit permission
        api_base_url: Cloudflare API root
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (used by tests)
    """

    name = "d1"

    def __init__(
        self,
        account_id: str,
        database_id: str,
        api_token: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        missing = [
            name for name, value in (
                ("account_id", account_id),
                ("database_id", database_id),
                ("api_token", api_token),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"D1 binding is missing: {', '.join(missing)}")

        self.database_id = database_id
        self._client = httpx.AsyncClient(
            base_url=f"{api_base_url.rstrip('/')}/accounts/{account_id}/d1/database/{database_id}",
            headers={"Authorization": f"Bearer {api_token}"},
            timeout=timeout,
            transport=transport,
        )

    async def _query(self, sql: str, params: tuple[Any, ...]) -> dict[str, Any]:
        """Send one statement and return its result entry."""
        try:
            response = await self._client.post(
                "/query",
                json={"sql": sql, "params": normalize_params(params)},
            )
        except httpx.HTTPError as e:
            logger.error(
                "D1 request failed",
                extra={"database_id": self.database_id, "error": str(e)},
            )
            raise DatabaseError(f"D1 request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("success", False):
            errors = body.get("errors")
            if not isinstance(errors, list):
                errors = []
            messages = "; ".join(
                str(err.get("message", "")) for err in errors if isinstance(err, dict)
            ) or f"HTTP {response.status_code}"
            logger.error(
                "D1 query failed",
                extra={
                    "database_id": self.database_id,
                    "status_code": response.status_code,
                    "errors": messages,
                },
            )
            raise DatabaseError(f"D1 query failed: {messages}")

        results = body.get("result") or []
        return results[0] if results else {}

    async def all(self, sql: str, *params: Any) -> list[Row]:
        result = await self._query(sql, params)
        return list(result.get("results") or [])

    async def get(self, sql: str, *params: Any) -> Row | None:
        rows = await self.all(sql, *params)
        return rows[0] if rows else None

    async def run(self, sql: str, *params: Any) -> RunResult:
        result = await self._query(sql, params)
        meta = result.get("meta") or {}
        return RunResult(changes=meta.get("changes") or 0)

    async def transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        return await fn()

    async def close(self) -> None:
        await self._client.aclose()
