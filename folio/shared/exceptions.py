"""
Application Exceptions
======================

Exception hierarchy raised by the core layer and translated to HTTP
responses by the API exception handlers.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_OPERATION = "INVALID_OPERATION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base class for errors that map to a client-facing response."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppException):
    """Referenced entity does not exist, is deleted, or belongs to another tenant."""

    code = ErrorCode.NOT_FOUND
    status_code = 404


class InvalidOperationError(AppException):
    """Request is well-formed but violates a hierarchy rule."""

    code = ErrorCode.INVALID_OPERATION
    status_code = 400


class UnauthorizedError(AppException):
    code = ErrorCode.UNAUTHORIZED
    status_code = 401


class ForbiddenError(AppException):
    code = ErrorCode.FORBIDDEN
    status_code = 403
