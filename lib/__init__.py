# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains client wrappers and small utilities:
# - supabase_client.py: Async Supabase wrapper with explicit lifecycle
# - cache.py: Best-effort Redis cache (get / set-with-TTL / prefix delete)
# - passwords.py: bcrypt password hashing
# - utils.py: Shared utilities (UUID checks, UTC clock)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.cache import (
    CacheLayer,
    CacheResult,
    CacheStatus,
    item_key,
    list_key,
    owner_namespace,
)
from lib.passwords import PasswordHasher
from lib.utils import is_valid_uuid, utcnow

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Cache
    "CacheLayer",
    "CacheResult",
    "CacheStatus",
    "item_key",
    "list_key",
    "owner_namespace",
    # Passwords
    "PasswordHasher",
    # Utils
    "is_valid_uuid",
    "utcnow",
]
