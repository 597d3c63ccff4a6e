"""
Integration Test Fixtures.

Fixtures for integration tests - the full FastAPI app over a real
in-memory SQLite database. These fixtures build on the root conftest.py
database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from nodash.backend.main import create_app
from nodash.backend.repositories.note import NoteRepository


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(note_repo: NoteRepository) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client serving the test repository.

    ASGITransport does not run the lifespan, so the injected repository
    is the only one the app ever sees.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(db=note_repo)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
async def sample_notes(client: AsyncClient) -> list[dict[str, Any]]:
    """
    Create a few notes through the API, oldest first.

    The last one is archived.
    """
    bodies = [
        {"title": "Shopping list", "content": "Milk, eggs and Bread"},
        {"title": "Meeting notes", "content": "Discuss the quarterly roadmap"},
        {"title": "Old idea", "content": "Archived thoughts about bread"},
    ]
    notes = []
    for body in bodies:
        response = await client.post("/api/notes", json=body)
        assert response.status_code == 201, response.text
        notes.append(response.json())

    response = await client.put(f"/api/notes/{notes[2]['id']}", json={"archived": True})
    assert response.status_code == 200, response.text
    notes[2] = response.json()
    return notes


# =============================================================================
# Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> Any:
        """
        Assert API response is successful.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_error: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error with the standard body.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_error: Expected ``error`` name (optional)

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data["statusCode"] == expected_status
        assert data["message"], f"Missing error message: {data}"

        if expected_error:
            assert data["error"] == expected_error, (
                f"Expected error {expected_error}, got {data['error']}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a validation error (400).

        Args:
            response: httpx Response object
            field: Expected field with validation error (optional)

        Returns:
            Response JSON data
        """
        data = ApiAssertions.assert_error(response, 400, "ValidationError")

        if field:
            fields = [d.get("field", "") for d in data.get("details", [])]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
