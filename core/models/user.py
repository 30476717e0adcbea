# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# - User: Stored account record (includes the password hash)
# - UserPublic: What the API returns - never the hash
# - AuthUser: Caller identity decoded from a bearer token
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from .task import CamelModel


class User(CamelModel):
    """
    A registered account.

    Email is unique and compared case-sensitively, exactly as stored.
    """

    id: str
    email: str
    password_hash: str = Field(..., repr=False)
    created_at: datetime

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=str(row["id"]),
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
        )

    def to_public(self) -> "UserPublic":
        return UserPublic(id=self.id, email=self.email, created_at=self.created_at)


class UserPublic(CamelModel):
    """Public view of a user: {id, email, createdAt}."""

    id: str
    email: str
    created_at: datetime


class AuthUser(CamelModel):
    """
    Caller identity decoded from a verified bearer token.

    This is all the request knows about the caller - no database lookup
    is made, so it stays valid for the token's lifetime even if the user
    is removed.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str | None = None
