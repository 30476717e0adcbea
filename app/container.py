# =============================================================================
# app/container.py - Service Wiring and Lifecycle
# =============================================================================
# Builds every stateful dependency explicitly from Settings and owns their
# lifecycle. The FastAPI lifespan calls startup() before serving traffic
# and shutdown() on exit; route handlers reach the services through
# app.state via app/dependencies.py.
#
# Startup order:
#   1. Supabase client (failure aborts startup - no store, no service)
#   2. Redis connection attempt (failure only degrades reads to the store)
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import timedelta

from app.config import Settings
from core.services import AccountService, AuthGateway, TaskService
from core.stores import TaskStore, UserStore
from lib.cache import CacheLayer
from lib.passwords import PasswordHasher
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """All long-lived collaborators for one application instance."""

    supabase: SupabaseClient
    cache: CacheLayer
    users: UserStore
    tasks: TaskStore
    gateway: AuthGateway
    accounts: AccountService
    task_service: TaskService

    async def startup(self) -> None:
        await self.supabase.connect()
        await self.cache.connect()
        logger.info(f"Container started (cache available: {self.cache.available})")

    async def shutdown(self) -> None:
        await self.cache.close()
        await self.supabase.close()
        logger.info("Container shut down")


def build_container(settings: Settings) -> Container:
    """Construct (but do not connect) the application's dependencies."""
    supabase = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    cache = CacheLayer.from_url(settings.REDIS_URL, socket_timeout=settings.CACHE_SOCKET_TIMEOUT)

    users = UserStore(supabase)
    tasks = TaskStore(supabase)

    gateway = AuthGateway(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        token_lifetime=timedelta(hours=settings.TOKEN_EXPIRE_HOURS),
    )

    return Container(
        supabase=supabase,
        cache=cache,
        users=users,
        tasks=tasks,
        gateway=gateway,
        accounts=AccountService(users, PasswordHasher(settings.BCRYPT_ROUNDS), gateway),
        task_service=TaskService(tasks, cache, cache_ttl=settings.CACHE_TTL_SECONDS),
    )
