"""
Unit Tests for Exception Handlers.
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.exceptions import RequestValidationError

from nodash.backend.core.exception_handlers import (
    application_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from nodash.backend.core.exceptions import (
    ApplicationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def mock_request():
    """Minimal request double."""
    request = MagicMock()
    request.url.path = "/api/notes"
    request.method = "GET"
    request.state.request_id = "req-1"
    return request


def _body(response) -> dict:
    return json.loads(response.body)


class TestApplicationErrorHandler:
    """Tests for application_error_handler."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("exc", "status", "error"),
        [
            (NotFoundError("Note with id 'x' not found"), 404, "NotFound"),
            (ValidationError("bad sort"), 400, "ValidationError"),
            (DatabaseError("locked"), 500, "DatabaseError"),
            (ApplicationError("oops"), 500, "InternalServerError"),
        ],
    )
    async def test_maps_class_to_status(self, mock_request, exc, status, error):
        """Should take status and error name from the exception class."""
        response = await application_error_handler(mock_request, exc)

        assert response.status_code == status
        assert _body(response) == {
            "error": error,
            "message": exc.message,
            "statusCode": status,
        }

    @pytest.mark.asyncio
    async def test_validation_details_included(self, mock_request):
        """Should include details for validation errors that carry them."""
        exc = ValidationError(
            "bad",
            details=[{"field": "sortBy", "message": "unknown", "type": "value_error"}],
        )

        response = await application_error_handler(mock_request, exc)

        assert _body(response)["details"] == [
            {"field": "sortBy", "message": "unknown", "type": "value_error"}
        ]


class TestValidationErrorHandler:
    """Tests for validation_error_handler."""

    @pytest.mark.asyncio
    async def test_returns_400_with_details(self, mock_request):
        """Should answer request validation failures with 400."""
        exc = RequestValidationError([
            {"loc": ("query", "limit"), "msg": "Input should be less than or equal to 1000", "type": "less_than_equal"},
        ])

        response = await validation_error_handler(mock_request, exc)

        body = _body(response)
        assert response.status_code == 400
        assert body["error"] == "ValidationError"
        assert body["statusCode"] == 400
        assert body["message"] == "query.limit: Input should be less than or equal to 1000"
        assert body["details"][0]["field"] == "query.limit"


class TestUnhandledExceptionHandler:
    """Tests for unhandled_exception_handler."""

    @pytest.mark.asyncio
    async def test_hides_internal_details(self, mock_request):
        """Should not leak the exception message."""
        response = await unhandled_exception_handler(mock_request, RuntimeError("secret"))

        body = _body(response)
        assert response.status_code == 500
        assert body == {
            "error": "InternalServerError",
            "message": "An unexpected error occurred",
            "statusCode": 500,
        }
