"""
HTTP Client for CLI and TUI.

Provides an async HTTP client for communicating with the backend API,
and a typed wrapper around the notes endpoints.
All requests include an X-Frontend-ID header for log routing.
"""

from typing import Any

import httpx

from nodash.backend.core.config import get_server_base_url
from nodash.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

NOTES_PATH = "/api/notes"


class APIError(Exception):
    """
    Non-2xx response from the backend.

    Carries the server's error name and message when the body has the
    standard ``{error, message, statusCode}`` shape.
    """

    def __init__(self, status_code: int, message: str, error: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        """Build an APIError from an error response."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and "message" in body:
            return cls(response.status_code, str(body["message"]), body.get("error"))
        return cls(
            response.status_code,
            response.text or response.reason_phrase or "Request failed",
        )

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class APIClient:
    """
    HTTP client for backend API communication.

    Features:
    - Automatic base URL from settings
    - X-Frontend-ID header for log routing
    - Structured logging of requests/responses

    Usage:
        client = APIClient()
        response = await client.get("/health")
        response = await client.post("/api/notes", json={"title": "test"})
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        frontend: str = "cli",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: Backend API base URL. If None, reads from config/settings/application.yaml.
            timeout: Request timeout in seconds. If None, reads from config/settings/application.yaml.
            frontend: Value sent as X-Frontend-ID and used as the log source.
            transport: Optional httpx transport (tests, in-process apps).
        """
        if base_url is None or timeout is None:
            try:
                config_base_url, config_timeout = get_server_base_url()
            except Exception as e:
                if base_url is None:
                    raise RuntimeError(
                        "Could not determine server URL from config/settings/application.yaml"
                    ) from e
                config_base_url, config_timeout = base_url, 30.0
        else:
            config_base_url, config_timeout = base_url, timeout

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self.frontend = frontend
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": self.frontend},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., /health, /api/notes)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            httpx.HTTPError: On request failure
        """
        client = await self._get_client()

        log_with_source(logger, self.frontend, "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                self.frontend,
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            self.frontend,
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)


def _json_or_raise(response: httpx.Response) -> Any:
    if response.is_success:
        return response.json()
    raise APIError.from_response(response)


class NotesAPI:
    """
    Typed wrapper around the ``/api/notes`` endpoints.

    Every method returns decoded JSON (notes as camelCase dicts) and
    raises APIError on a non-2xx response.
    """

    def __init__(self, client: APIClient) -> None:
        self.client = client

    async def list_notes(
        self,
        archived: bool = False,
        limit: int | None = None,
        offset: int = 0,
        sort_by: str = "updatedAt",
        sort_order: str = "desc",
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "archived": str(archived).lower(),
            "offset": offset,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }
        if limit is not None:
            params["limit"] = limit
        return _json_or_raise(await self.client.get(NOTES_PATH, params=params))

    async def search_notes(
        self,
        query: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"q": query, "offset": offset}
        if limit is not None:
            params["limit"] = limit
        return _json_or_raise(await self.client.get(f"{NOTES_PATH}/search", params=params))

    async def get_note(self, note_id: str) -> dict[str, Any]:
        return _json_or_raise(await self.client.get(f"{NOTES_PATH}/{note_id}"))

    async def create_note(self, title: str, content: str = "") -> dict[str, Any]:
        return _json_or_raise(
            await self.client.post(NOTES_PATH, json={"title": title, "content": content})
        )

    async def update_note(
        self,
        note_id: str,
        title: str | None = None,
        content: str | None = None,
        archived: bool | None = None,
    ) -> dict[str, Any]:
        """Send only the fields that were given."""
        body = {
            key: value
            for key, value in (("title", title), ("content", content), ("archived", archived))
            if value is not None
        }
        return _json_or_raise(await self.client.put(f"{NOTES_PATH}/{note_id}", json=body))

    async def delete_note(self, note_id: str) -> None:
        response = await self.client.delete(f"{NOTES_PATH}/{note_id}")
        if not response.is_success:
            raise APIError.from_response(response)


# Module-level client instance
_client: APIClient | None = None


def get_api_client() -> APIClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client


async def close_api_client() -> None:
    """Close the API client."""
    global _client
    if _client:
        await _client.close()
        _client = None
