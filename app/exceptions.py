# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where possible, how to fix them.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Codes for errors raised by the framework or by auth dependencies
HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    415: "UNSUPPORTED_MEDIA_TYPE",
    429: "TOO_MANY_REQUESTS",
}


class ContactManagerException(Exception):
    """
    Base exception for the Contact Manager API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONTACT_MANAGER_ERROR",
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
# Contact Exceptions
# =============================================================================

class ContactNotFoundError(ContactManagerException):
    """Raised when a contact ID doesn't exist."""

    def __init__(self, contact_id: str):
        super().__init__(
            message="Contact could not be found.",
            code="CONTACT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the contact id is correct and the contact hasn't been deleted",
            details={"contact_id": contact_id}
        )


class DatabaseUnavailableError(ContactManagerException):
    """Raised when the contact store fails to answer."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Database error during {operation}: {error}",
            code="DATABASE_UNAVAILABLE",
            status_code=503,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidCredentialsError(ContactManagerException):
    """Raised when a login attempt is rejected."""

    def __init__(self, email: str):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Check your email and password and try again",
            details={"email": email}
        )


class AuthServiceError(ContactManagerException):
    """Raised when the auth provider cannot be reached."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Authentication service error: {error}",
            code="AUTH_SERVICE_ERROR",
            status_code=503,
            suggestion="Try again later or contact support if the issue persists",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def contact_manager_exception_handler(
    request: Request,
    exc: ContactManagerException
) -> JSONResponse:
    """
    Convert ContactManagerException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    logger.info(
        f"{request.method} {request.url.path} -> 422 VALIDATION_ERROR: {len(exc.errors())} error(s)"
    )
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Give framework HTTP errors (401 from auth, 405, ...) the same
    envelope as ContactManagerException.
    """
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {code}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": code},
        headers=getattr(exc, "headers", None),
    )
