# =============================================================================
# core/services/account_service.py - Signup and Login
# =============================================================================
# Combines the credential store, the password hasher and the auth gateway.
# Both operations return the user record plus a freshly issued token.
# =============================================================================

import logging

from app.exceptions import (
    DuplicateResourceError,
    InvalidLoginError,
    MissingFieldError,
)
from core.models.user import User
from core.services.auth_gateway import AuthGateway
from core.stores.user_store import DuplicateEmailError, UserStore
from lib.passwords import PasswordHasher

logger = logging.getLogger(__name__)


def _require_credentials(email: str | None, password: str | None) -> None:
    missing = [name for name, value in (("email", email), ("password", password)) if not value]
    if missing:
        raise MissingFieldError("Email and password are required", missing)


class AccountService:
    """Service for account creation and authentication."""

    def __init__(self, users: UserStore, hasher: PasswordHasher, gateway: AuthGateway):
        self._users = users
        self._hasher = hasher
        self._gateway = gateway

    async def signup(self, email: str | None, password: str | None) -> tuple[User, str]:
        """
        Register a new user and log them in.

        Raises:
            MissingFieldError: email or password missing
            DuplicateResourceError: email already registered
        """
        _require_credentials(email, password)

        if await self._users.find_by_email(email) is not None:
            raise DuplicateResourceError(email)

        password_hash = self._hasher.hash(password)
        try:
            user = await self._users.create(email, password_hash)
        except DuplicateEmailError:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateResourceError(email)

        logger.info(f"User signed up: {user.id}")
        return user, self._gateway.issue_credential(user.id, user.email)

    async def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """
        Check credentials and issue a token.

        Raises:
            MissingFieldError: email or password missing
            InvalidLoginError: unknown email or wrong password
        """
        _require_credentials(email, password)

        user = await self._users.find_by_email(email)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidLoginError()

        return user, self._gateway.issue_credential(user.id, user.email)
