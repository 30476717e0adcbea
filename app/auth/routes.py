# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup and login issue bearer tokens; /verify checks one.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.auth.models import AuthResponse, AuthUser, CredentialsRequest, VerifyResponse
from app.dependencies import AccountServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=AuthResponse)
async def login(body: CredentialsRequest, accounts: AccountServiceDep) -> AuthResponse:
    """
    Log in with email and password.

    Raises:
        400: If email or password is missing
        401: If the credentials don't match
    """
    user, token = await accounts.login(body.email, body.password)

    return AuthResponse(
        message="Login successful",
        token=token,
        user=user.to_public(),
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: CredentialsRequest, accounts: AccountServiceDep) -> AuthResponse:
    """
    Register a new account and return a token for it.

    Raises:
        400: If email or password is missing
        409: If the email is already registered
    """
    user, token = await accounts.signup(body.email, body.password)

    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=user.to_public(),
    )


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(user: AuthUser = Depends(get_current_user)) -> VerifyResponse:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return VerifyResponse(user_id=user.id, email=user.email)
