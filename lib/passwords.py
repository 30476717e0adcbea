# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Thin wrapper around bcrypt. The hash is stored as a UTF-8 string.
#
# bcrypt only looks at the first 72 bytes of a password; newer releases
# raise instead of truncating silently, so we truncate explicitly.
# =============================================================================

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt hasher with a configurable cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if the password matches. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            return False
