# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - tasks.py: Task CRUD and cache-clearing endpoints
#
# Each router is mounted in main.py.
# =============================================================================

from . import health
from . import tasks

__all__ = [
    "health",
    "tasks",
]
