# =============================================================================
# core/services/auth_gateway.py - Bearer Credential Issue/Verify
# =============================================================================
# Issues and verifies self-contained HS256 JWTs:
#   {"sub": <owner id>, "email": <email>, "iat": ..., "exp": iat + 24h}
#
# Verification is pure computation (signature + expiry). There is no store
# lookup, so a token stays valid for its full lifetime even if the user is
# later removed.
# =============================================================================

import logging
from datetime import datetime, timedelta
from typing import Callable

from jose import ExpiredSignatureError, JWTError, jwt

from app.exceptions import (
    ExpiredCredentialError,
    InvalidCredentialError,
    MissingCredentialError,
)
from core.models.user import AuthUser
from lib.utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


class AuthGateway:
    """
    Issues and verifies bearer credentials.

    Args:
        secret: HMAC signing secret
        algorithm: JWT algorithm (HS256 by default)
        token_lifetime: How long an issued token stays valid
        clock: Returns the current UTC time; swapped out in tests
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        token_lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._token_lifetime = token_lifetime
        self._clock = clock

    def issue_credential(self, owner_id: str, email: str) -> str:
        """Produce a signed token for this owner. No side effects."""
        issued_at = self._clock()
        claims = {
            "sub": str(owner_id),
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._token_lifetime).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify_credential(self, token: str | None) -> AuthUser:
        """
        Decode a token into the caller's identity.

        Raises:
            MissingCredentialError: No token presented
            ExpiredCredentialError: Token is past its expiry
            InvalidCredentialError: Bad signature, bad format, or no subject
        """
        if not token:
            raise MissingCredentialError()

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise ExpiredCredentialError()
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise InvalidCredentialError(str(e))

        owner_id = payload.get("sub")
        if not owner_id:
            logger.warning("JWT token missing 'sub' claim")
            raise InvalidCredentialError("Token is missing the user ID")

        return AuthUser(id=str(owner_id), email=payload.get("email"))
