# =============================================================================
# lib/cache.py - Redis Cache Layer
# =============================================================================
# Best-effort key/value cache with per-key TTL, backed by redis.asyncio.
#
# The cache is an optimization, never a correctness dependency:
# - get() collapses every fault into CacheStatus.UNAVAILABLE, which callers
#   treat exactly like a miss
# - set_with_ttl() and delete_by_prefix() log failures and return normally
#
# Key layout (one namespace per owner):
#   owner:<ownerId>:tasks            - the owner's task list
#   owner:<ownerId>:task:<taskId>    - a single task
#
# Usage:
#   cache = CacheLayer.from_url(settings.REDIS_URL)
#   await cache.connect()
#   result = await cache.get(list_key(owner_id))
#   if result.hit:
#       ...
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


# =============================================================================
# Key Helpers
# =============================================================================

def owner_namespace(owner_id: str) -> str:
    """Prefix shared by every cache key belonging to one owner."""
    return f"owner:{owner_id}:"


def list_key(owner_id: str) -> str:
    return f"{owner_namespace(owner_id)}tasks"


def item_key(owner_id: str, task_id: str) -> str:
    return f"{owner_namespace(owner_id)}task:{task_id}"


# =============================================================================
# Result Type
# =============================================================================

class CacheStatus(str, Enum):
    """
    Outcome of a cache read.

    - found: key exists, value attached
    - not_found: key absent or expired
    - unavailable: the cache could not be asked (treated as not_found)
    """
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class CacheResult:
    status: CacheStatus
    value: bytes | None = None

    @property
    def hit(self) -> bool:
        return self.status == CacheStatus.FOUND


MISS = CacheResult(CacheStatus.NOT_FOUND)
UNAVAILABLE = CacheResult(CacheStatus.UNAVAILABLE)


# =============================================================================
# Cache Layer
# =============================================================================

class CacheLayer:
    """
    Redis-backed cache adapter with explicit connect/close.

    If the connection attempt at startup fails, the adapter is marked
    unavailable but still tries each command: the redis client reconnects
    lazily, and any error is swallowed and logged.
    """

    def __init__(self, client: Any):
        self._client = client
        self._available = False

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 2.0) -> "CacheLayer":
        """Build a cache adapter for a redis:// URL (not yet connected)."""
        client = Redis.from_url(
            url,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        return cls(client)

    @property
    def available(self) -> bool:
        """Whether the last connection check succeeded."""
        return self._available

    async def connect(self) -> bool:
        """
        Resolve the initial connection attempt.

        Returns True on success. Never raises - a failed connect only
        degrades reads to store-only.
        """
        self._available = await self.ping()
        if self._available:
            logger.info("Redis connected for caching")
        else:
            logger.warning("Redis unavailable at startup; reads will go to the store")
        return self._available

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except Exception as e:
            logger.warning(f"Error closing Redis client: {e}")
        self._available = False

    async def ping(self) -> bool:
        try:
            await self._client.ping()
            return True
        except Exception as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> CacheResult:
        try:
            value = await self._client.get(key)
        except Exception as e:
            logger.warning(f"Cache read error for {key}: {e}")
            return UNAVAILABLE

        if value is None:
            return MISS
        if isinstance(value, str):
            value = value.encode("utf-8")
        return CacheResult(CacheStatus.FOUND, value)

    async def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> bool:
        """Store a value with an expiry. Returns False (logged) on failure."""
        try:
            await self._client.set(key, value, ex=ttl_seconds)
            return True
        except Exception as e:
            logger.warning(f"Cache write error for {key}: {e}")
            return False

    async def delete_by_prefix(self, prefix: str) -> int:
        """
        Delete every key starting with `prefix` in a single DEL.

        Keys are enumerated with SCAN so a large keyspace never blocks the
        server. Returns the number of keys deleted, 0 on failure.
        """
        pattern = f"{prefix}*"
        try:
            keys = [key async for key in self._client.scan_iter(match=pattern)]
            if not keys:
                return 0
            deleted = await self._client.delete(*keys)
            logger.debug(f"Invalidated {deleted} cache keys matching {pattern}")
            return deleted
        except Exception as e:
            logger.error(f"Cache invalidation error for {pattern}: {e}")
            return 0
