"""
Exception Handlers.

FastAPI exception handlers that convert application exceptions
to the standard ``{error, message, statusCode}`` response body.
All exceptions are logged.

Usage:
    from nodash.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nodash.backend.core.exceptions import ApplicationError, ValidationError
from nodash.backend.core.logging import get_logger
from nodash.backend.schemas.base import ErrorResponse, ValidationErrorDetail

logger = get_logger(__name__)


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _error_response(body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=body.status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Handle all ApplicationError subclasses.

    The HTTP status and error name come from the exception class.
    """
    log_extra = {
        "error": exc.error,
        "message": exc.message,
        "status": exc.status_code,
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
    }

    if exc.status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    details = None
    if isinstance(exc, ValidationError) and exc.details:
        details = [ValidationErrorDetail.model_validate(d) for d in exc.details]

    return _error_response(
        ErrorResponse(
            error=exc.error,
            message=exc.message,
            status_code=exc.status_code,
            details=details,
        )
    )


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Answered with 400 rather than FastAPI's default 422.
    """
    errors = exc.errors()
    details = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in err.get("loc", [])),
            message=err.get("msg", "Validation error"),
            type=err.get("type", "unknown"),
        )
        for err in errors
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": _get_request_id(request),
        },
    )

    if details:
        message = f"{details[0].field}: {details[0].message}"
    else:
        message = "Request validation failed"

    return _error_response(
        ErrorResponse(
            error=ValidationError.error,
            message=message,
            status_code=ValidationError.status_code,
            details=details,
        )
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Returns a generic 500 body; internal details are only logged.
    """
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": _get_request_id(request),
        },
    )

    return _error_response(
        ErrorResponse(
            error=ApplicationError.error,
            message="An unexpected error occurred",
            status_code=500,
        )
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
