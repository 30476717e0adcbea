# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the connection to the Supabase (PostgREST) document store
# used by the credential and task stores.
#
# Unlike a process-wide singleton, the client is constructed explicitly and
# has an explicit lifecycle:
#   client = SupabaseClient(url, key)
#   await client.connect()
#   ...
#   await client.close()
#
# Stores receive the wrapper and call `table()` to build queries.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import AsyncClient, acreate_client

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def error_code(exc: Exception) -> str | None:
    """Extract the Postgres error code from an exception (postgrest APIError has `.code`)."""
    code = getattr(exc, "code", None)
    return str(code) if code else None


class SupabaseClient:
    """
    Async Supabase client wrapper with explicit connect/close.

    Uses the service_role key, which bypasses Row Level Security (RLS).
    Ownership scoping is therefore enforced by the stores themselves.

    Example:
        client = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        await client.connect()
        rows = await client.table("tasks").select("*").execute()
    """

    def __init__(self, url: str, key: str):
        self._url = url
        self._key = key
        self._client: AsyncClient | None = None

    async def connect(self) -> None:
        """
        Create the underlying async client.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if self._client is not None:
            return
        try:
            self._client = await acreate_client(self._url, self._key)
            logger.info("Supabase client initialized successfully")
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
            )

    async def close(self) -> None:
        """Release the HTTP session held by the PostgREST client."""
        if self._client is None:
            return
        try:
            await self._client.postgrest.aclose()
        except Exception as e:
            logger.warning(f"Error closing Supabase client: {e}")
        finally:
            self._client = None
            logger.info("Supabase client closed")

    def table(self, name: str):
        """
        Start a query against a table.

        Raises:
            SupabaseClientError: If connect() has not been called
        """
        if self._client is None:
            raise SupabaseClientError(
                message="Supabase client is not connected",
                code="CLIENT_NOT_CONNECTED",
                suggestion="Call connect() during application startup",
            )
        return self._client.table(name)

    async def ping(self, table: str = "users") -> bool:
        """Run a trivial one-row select. Used by readiness checks."""
        try:
            await self.table(table).select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Supabase ping failed: {e}")
            return False
