"""
Integration Tests for Health and Status Endpoints.
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from nodash.backend.core.exceptions import DatabaseError
from nodash.backend.main import create_app
from nodash.backend.repositories.note import NoteRepository


class TestStatus:
    """Tests for GET /."""

    @pytest.mark.asyncio
    async def test_root_reports_operational(self, client: AsyncClient):
        """Should report name, version and status."""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "operational"
        assert data["name"]
        assert data["version"]

    @pytest.mark.asyncio
    async def test_request_id_propagated(self, client: AsyncClient):
        """Should echo X-Request-ID and add timing."""
        response = await client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert "X-Response-Time" in response.headers


class TestHealth:
    """Tests for /health and /health/ready."""

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        """Should always report healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_readiness_healthy(self, client: AsyncClient):
        """Should report the sqlite backend as healthy."""
        response = await client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "healthy"
        assert data["checks"]["database"]["backend"] == "sqlite"

    @pytest.mark.asyncio
    async def test_readiness_unhealthy(self, note_repo: NoteRepository):
        """Should return 503 when the backend cannot answer."""
        app = create_app(db=note_repo)

        with patch.object(
            note_repo, "ping", new_callable=AsyncMock, side_effect=DatabaseError("down")
        ):
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as client:
                response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["detail"]["checks"]["database"]["error"] == "down"


class TestServerErrors:
    """Tests for storage failures surfacing as 500."""

    @pytest.mark.asyncio
    async def test_database_error_is_500(self, note_repo: NoteRepository):
        """Should answer a DatabaseError with the standard 500 body."""
        app = create_app(db=note_repo)

        with patch.object(
            note_repo,
            "get_notes",
            new_callable=AsyncMock,
            side_effect=DatabaseError("disk I/O error"),
        ):
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as client:
                response = await client.get("/api/notes")

        assert response.status_code == 500
        assert response.json() == {
            "error": "DatabaseError",
            "message": "disk I/O error",
            "statusCode": 500,
        }

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, note_repo: NoteRepository):
        """Should hide unexpected exceptions behind a generic 500."""
        app = create_app(db=note_repo)

        with patch.object(
            note_repo,
            "search_notes",
            new_callable=AsyncMock,
            side_effect=RuntimeError("boom"),
        ):
            async with AsyncClient(
                transport=ASGITransport(app=app, raise_app_exceptions=False),
                base_url="http://test",
            ) as client:
                response = await client.get("/api/notes/search", params={"q": "x"})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "InternalServerError"
        assert data["message"] == "An unexpected error occurred"
        assert "boom" not in response.text
