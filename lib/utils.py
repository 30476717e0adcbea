# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def is_valid_uuid(value: str | UUID | None) -> bool:
    """
    Check whether a value is a UUID in canonical 8-4-4-4-12 form.

    Store identifiers are Postgres uuid columns. Spellings the uuid module
    tolerates but Postgres rejects ("urn:uuid:..." prefixes, hyphens in
    other places) are refused here so they never reach a query.
    """
    if value is None:
        return False
    if isinstance(value, UUID):
        return True
    text = str(value)
    try:
        parsed = UUID(text)
    except ValueError:
        return False
    return str(parsed) == text.lower()


# =============================================================================
# Time Utilities
# =============================================================================

def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)
