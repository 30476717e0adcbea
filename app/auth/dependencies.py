# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Extracts the bearer token and verifies it with the AuthGateway.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.dependencies import get_auth_gateway
from core.models.user import AuthUser
from core.services.auth_gateway import AuthGateway

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. auto_error is off so a missing header is
# reported through MissingCredentialError like every other auth failure.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    gateway: AuthGateway = Depends(get_auth_gateway),
) -> AuthUser:
    """
    Resolve the caller from the Authorization header.

    Raises:
        MissingCredentialError: 401 if no bearer token was sent
        InvalidCredentialError: 403 if the token is malformed or tampered
        ExpiredCredentialError: 403 if the token has expired
    """
    token = credentials.credentials if credentials else None
    user = gateway.verify_credential(token)
    logger.debug(f"Authenticated user: {user.id}")
    return user
