# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - task.py: Task record, create/update inputs, cache snapshot helpers
# - user.py: User record and its public view
#
# These models define the "contract" between API and clients.
# =============================================================================

from .task import (
    CamelModel,
    DueDate,
    Task,
    TaskUpdate,
    dump_task_list,
    load_task_list,
)
from .user import AuthUser, User, UserPublic

__all__ = [
    "CamelModel",
    "DueDate",
    "Task",
    "TaskUpdate",
    "dump_task_list",
    "load_task_list",
    "AuthUser",
    "User",
    "UserPublic",
]
