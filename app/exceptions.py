# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# "Errors should tell HOW to fix, not just WHAT failed."
#
# Every error response is a JSON object with at least `message` and `code`.
# Store failures and unexpected exceptions become a generic 500 - internal
# detail is logged, never sent to the client.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class TaskListException(Exception):
    """
    Base exception for the TaskList API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "TASKLIST_ERROR",
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
            "message": self.message,
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

class MissingFieldError(TaskListException):
    """Raised when a required request field is absent or empty."""

    def __init__(self, message: str, fields: list[str]):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion=f"Provide a value for: {', '.join(fields)}",
            details={"fields": fields}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthError(TaskListException):
    """Base class for bearer credential failures."""


class MissingCredentialError(AuthError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self):
        super().__init__(
            message="Access token required",
            code="MISSING_CREDENTIAL",
            status_code=401,
            suggestion="Send an 'Authorization: Bearer <token>' header obtained from /auth/login",
        )


class InvalidCredentialError(AuthError):
    """Raised when a token has a bad signature or malformed claims."""

    def __init__(self, reason: str = "Invalid token"):
        super().__init__(
            message="Invalid or expired token",
            code="INVALID_CREDENTIAL",
            status_code=403,
            suggestion="Log in again to obtain a fresh token",
            details={"reason": reason}
        )


class ExpiredCredentialError(AuthError):
    """Raised when a token is past its expiry."""

    def __init__(self):
        super().__init__(
            message="Invalid or expired token",
            code="EXPIRED_CREDENTIAL",
            status_code=403,
            suggestion="Log in again to obtain a fresh token",
            details={"reason": "Token has expired"}
        )


class InvalidLoginError(TaskListException):
    """Raised when email/password do not match a user. Does not say which."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_LOGIN",
            status_code=401,
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class DuplicateResourceError(TaskListException):
    """Raised when signing up with an email that is already registered."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists with this email",
            code="DUPLICATE_RESOURCE",
            status_code=409,
            suggestion="Log in with POST /auth/login instead",
            details={"email": email}
        )


class TaskNotFoundError(TaskListException):
    """Raised when a task ID doesn't exist for the requesting owner."""

    def __init__(self, task_id: str):
        super().__init__(
            message="Task not found",
            code="TASK_NOT_FOUND",
            status_code=404,
            suggestion="Check that the task id is correct and belongs to you",
            details={"task_id": task_id}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

INTERNAL_ERROR_BODY = {
    "message": "Internal server error",
    "code": "INTERNAL_ERROR",
}


async def tasklist_exception_handler(
    request: Request,
    exc: TaskListException
) -> JSONResponse:
    """Convert TaskListException to JSON response."""
    headers = None
    if exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies (bad JSON, wrong types, bad dates).

    Reported as 400 like any other validation failure.
    """
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "error": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request body",
            "code": "VALIDATION_ERROR",
            "details": {"errors": errors},
        }
    )


async def store_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """Store failures are logged in full and reported as a generic 500."""
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the standard error shape."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "message": message,
            "code": HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        },
        headers=getattr(exc, "headers", None),
    )
