# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Request/response bodies for the auth endpoints.
# =============================================================================

from typing import Optional

from pydantic import BaseModel

from core.models import AuthUser, CamelModel, UserPublic


class CredentialsRequest(BaseModel):
    """
    Body for /auth/login and /auth/signup.

    Both fields are optional here so that a missing value is reported as a
    400 "Email and password are required" by the service.
    """
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """Token plus public user info, returned by login and signup."""
    message: str
    token: str
    user: UserPublic


class VerifyResponse(CamelModel):
    """Result of checking a stored token."""
    message: str = "Token is valid"
    valid: bool = True
    user_id: str
    email: Optional[str] = None


__all__ = [
    "AuthUser",
    "AuthResponse",
    "CredentialsRequest",
    "VerifyResponse",
]
