# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Probes for load balancers and orchestrators:
#   /health        - static process info, never touches a dependency
#   /health/ready  - pings the task database and the Redis cache
#   /health/live   - process is up and the event loop answers
#
# A down cache reports "degraded" rather than failing: task reads keep
# working from the database.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import ContainerDep
from lib.utils import utcnow

router = APIRouter()

API_VERSION = "1.0.0"

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"


# =============================================================================
# Response Models
# =============================================================================

class ServiceInfo(BaseModel):
    """Static status: which build is running, and where."""
    status: str
    timestamp: str
    environment: str
    version: str


class DependencyChecks(BaseModel):
    database: str
    cache: str


class ReadinessReport(BaseModel):
    """`ready` when every dependency answered, `degraded` otherwise."""
    status: str
    checks: DependencyChecks
    timestamp: str


class LivenessStatus(BaseModel):
    status: str
    timestamp: str


def _stamp() -> str:
    return utcnow().isoformat()


def _label(ok: bool) -> str:
    return HEALTHY if ok else UNHEALTHY


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=ServiceInfo)
async def health_check():
    """Report the running environment and API version."""
    return ServiceInfo(
        status=HEALTHY,
        timestamp=_stamp(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessReport)
async def readiness_check(container: ContainerDep):
    """
    Ping the users table and Redis.

    Always answers 200; callers read `status` and `checks` to decide
    whether to route traffic here.
    """
    checks = DependencyChecks(
        database=_label(await container.users.ping()),
        cache=_label(await container.cache.ping()),
    )
    everything_up = checks.database == HEALTHY and checks.cache == HEALTHY

    return ReadinessReport(
        status="ready" if everything_up else "degraded",
        checks=checks,
        timestamp=_stamp(),
    )


@router.get("/health/live", response_model=LivenessStatus)
async def liveness_check():
    return LivenessStatus(status="alive", timestamp=_stamp())
