"""
Unit Tests for the Cloudflare D1 Binding.

Requests are answered by an httpx.MockTransport; nothing leaves the process.
"""

import json
from typing import Any

import httpx
import pytest

from nodash.backend.core.exceptions import DatabaseError
from nodash.backend.db.d1 import D1Binding


def _ok(results: list[dict[str, Any]] | None = None, changes: int = 0) -> dict[str, Any]:
    return {
        "success": True,
        "errors": [],
        "messages": [],
        "result": [
            {
                "success": True,
                "results": results or [],
                "meta": {"changes": changes},
            }
        ],
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        queue = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return queue.pop(0)

        super().__init__(handler)


def _binding(transport: httpx.MockTransport) -> D1Binding:
    return D1Binding(
        account_id="acct",
        database_id="db-1",
        api_token="secret",
        api_base_url="https://d1.test/client/v4",
        transport=transport,
    )


class TestRequests:
    """Tests for the request sent to the D1 API."""

    @pytest.mark.asyncio
    async def test_posts_sql_and_params(self):
        """Should POST sql/params to the database query endpoint with the token."""
        transport = RecordingTransport(httpx.Response(200, json=_ok()))
        binding = _binding(transport)

        await binding.all('select * from "notes" where "archived" = ?', False)
        await binding.close()

        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url == "https://d1.test/client/v4/accounts/acct/d1/database/db-1/query"
        assert request.headers["Authorization"] == "Bearer secret"
        assert json.loads(request.content) == {
            "sql": 'select * from "notes" where "archived" = ?',
            "params": [0],
        }


class TestResults:
    """Tests for result decoding."""

    @pytest.mark.asyncio
    async def test_all_and_get(self):
        """Should return the result rows, and the first row for get."""
        rows = [{"id": "a"}, {"id": "b"}]
        transport = RecordingTransport(
            httpx.Response(200, json=_ok(rows)),
            httpx.Response(200, json=_ok(rows)),
            httpx.Response(200, json=_ok([])),
        )
        binding = _binding(transport)

        assert await binding.all("select 1") == rows
        assert await binding.get("select 1") == {"id": "a"}
        assert await binding.get("select 1") is None
        await binding.close()

    @pytest.mark.asyncio
    async def test_run_reports_changes(self):
        """Should read changes from the result meta."""
        transport = RecordingTransport(httpx.Response(200, json=_ok(changes=3)))
        binding = _binding(transport)

        result = await binding.run('delete from "notes"')

        assert result.changes == 3
        await binding.close()

    @pytest.mark.asyncio
    async def test_transaction_awaits_callable(self):
        """Should simply await the callable."""
        binding = _binding(RecordingTransport())

        async def work() -> int:
            return 7

        assert await binding.transaction(work) == 7
        await binding.close()


class TestErrors:
    """Tests for failure reporting."""

    @pytest.mark.asyncio
    async def test_api_error_raises_database_error(self):
        """Should surface the API's error messages."""
        body = {
            "success": False,
            "errors": [{"code": 7500, "message": "no such table: notes"}],
            "result": [],
        }
        binding = _binding(RecordingTransport(httpx.Response(400, json=body)))

        with pytest.raises(DatabaseError, match="no such table: notes"):
            await binding.all('select * from "notes"')
        await binding.close()

    @pytest.mark.asyncio
    async def test_non_json_error(self):
        """Should fall back to the HTTP status."""
        binding = _binding(RecordingTransport(httpx.Response(502, text="bad gateway")))

        with pytest.raises(DatabaseError, match="HTTP 502"):
            await binding.run("select 1")
        await binding.close()

    @pytest.mark.asyncio
    async def test_json_array_error_body(self):
        """Should fall back to the HTTP status when the body is not an object."""
        binding = _binding(
            RecordingTransport(httpx.Response(502, json=["bad gateway"]))
        )

        with pytest.raises(DatabaseError, match="HTTP 502"):
            await binding.all("select 1")
        await binding.close()

    @pytest.mark.asyncio
    async def test_string_errors_are_skipped(self):
        """Should ignore error entries that are not objects."""
        body = {
            "success": False,
            "errors": ["quota exceeded", {"message": "D1_ERROR"}],
        }
        binding = _binding(RecordingTransport(httpx.Response(429, json=body)))

        with pytest.raises(DatabaseError, match="D1_ERROR"):
            await binding.all("select 1")
        await binding.close()

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Should wrap transport failures."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        binding = _binding(httpx.MockTransport(handler))

        with pytest.raises(DatabaseError, match="unreachable"):
            await binding.get("select 1")
        await binding.close()

    def test_missing_credentials(self):
        """Should refuse to build without account, database and token."""
        with pytest.raises(ValueError, match="api_token"):
            D1Binding(account_id="acct", database_id="db-1", api_token="")
