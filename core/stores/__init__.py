# =============================================================================
# core/stores/ - Persistence Adapters
# =============================================================================
# Thin adapters over the Supabase document store:
# - user_store.py: Credential Store (users table)
# - task_store.py: Task Store (tasks table)
# =============================================================================

from .user_store import DuplicateEmailError, UserStore
from .task_store import TaskStore

__all__ = [
    "DuplicateEmailError",
    "UserStore",
    "TaskStore",
]
