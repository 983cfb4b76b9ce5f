# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error the layers below can raise maps to one HTTP status here:
# - validation failures -> 400
# - missing records     -> 404
# - storage failures    -> 500 (cause is logged, never returned)
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WebStarterException(Exception):
    """
    Base exception for the web starter.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "WEB_STARTER_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationFailedError(WebStarterException):
    """Raised when client input is malformed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion="Fix the request body and try again",
            details={"field": field} if field else None,
        )


class EmailAlreadyExistsError(WebStarterException):
    """Raised when another user already owns the email address."""

    def __init__(self, email: str):
        super().__init__(
            message=f"Email already in use: {email}",
            code="EMAIL_ALREADY_EXISTS",
            status_code=400,
            suggestion="Use a different email address or update the existing user",
            details={"email": email},
        )


# =============================================================================
# User Exceptions
# =============================================================================

class UserNotFoundError(WebStarterException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the user id is correct",
            details={"user_id": user_id},
        )


# =============================================================================
# Infrastructure Exceptions
# =============================================================================

class StorageError(WebStarterException):
    """
    Raised when the database could not complete an operation.

    The driver error is kept as ``__cause__`` for logging only;
    the response body stays generic.
    """

    def __init__(self, operation: str):
        super().__init__(
            message="A storage error occurred",
            code="STORAGE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )
        self.operation = operation


class ConfigurationError(WebStarterException):
    """Raised at startup when the environment can't produce valid settings."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Invalid configuration: {error}",
            code="CONFIGURATION_ERROR",
            status_code=500,
            suggestion="Check the BIND_*, MONGODB_* and REDIS_* environment variables",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def web_starter_exception_handler(
    request: Request,
    exc: WebStarterException
) -> JSONResponse:
    """
    Convert WebStarterException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s (%r)",
            request.method,
            request.url.path,
            exc.code,
            exc.__cause__,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed bodies and parameters are client errors, reported as 400.
    """
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    logger.exception("Unexpected error handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
