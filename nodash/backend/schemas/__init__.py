# Pydantic schemas package
from nodash.backend.schemas.base import (
    CamelModel,
    ErrorResponse,
    PaginatedResponse,
    StatusResponse,
    ValidationErrorDetail,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "PaginatedResponse",
    "StatusResponse",
    "ValidationErrorDetail",
]
