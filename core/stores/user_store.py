# =============================================================================
# core/stores/user_store.py - Credential Store
# =============================================================================
# Persists user records in the `users` table:
#   id uuid primary key default gen_random_uuid()
#   email text unique not null
#   password_hash text not null
#   created_at timestamptz not null default now()
# =============================================================================

import logging

from core.models.user import User
from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    UNIQUE_VIOLATION_CODE,
    error_code,
)

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class DuplicateEmailError(Exception):
    """The store's unique constraint rejected an email."""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class UserStore:
    """Lookup-by-email and create for user records."""

    def __init__(self, client: SupabaseClient):
        self._client = client

    async def find_by_email(self, email: str) -> User | None:
        """
        Fetch the user with this exact email.

        Raises:
            SupabaseClientError: If the query fails
        """
        try:
            response = await (
                self._client.table(USERS_TABLE)
                .select("*")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to look up user: {e}",
                code="FETCH_USER_FAILED",
                suggestion="Check that the users table exists and is accessible",
            )

        rows = response.data or []
        return User.from_db_row(rows[0]) if rows else None

    async def create(self, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises:
            DuplicateEmailError: If the email is already taken
            SupabaseClientError: If the insert fails for any other reason
        """
        try:
            response = await (
                self._client.table(USERS_TABLE)
                .insert({"email": email, "password_hash": password_hash})
                .execute()
            )
        except Exception as e:
            if error_code(e) == UNIQUE_VIOLATION_CODE:
                raise DuplicateEmailError(email)
            raise SupabaseClientError(
                message=f"Failed to create user: {e}",
                code="CREATE_USER_FAILED",
            )

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="CREATE_USER_FAILED",
            )

        user = User.from_db_row(response.data[0])
        logger.info(f"Created user: {user.id}")
        return user

    async def ping(self) -> bool:
        return await self._client.ping(USERS_TABLE)
