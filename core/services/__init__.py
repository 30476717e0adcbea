# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_gateway import AuthGateway
from .account_service import AccountService
from .task_service import TaskService

__all__ = [
    "AuthGateway",
    "AccountService",
    "TaskService",
]
