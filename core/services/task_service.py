# =============================================================================
# core/services/task_service.py - Task Business Logic
# =============================================================================
# CRUD for tasks with cache-aside reads:
#
#   read:  cache hit  -> return snapshot (cached=True)
#          cache miss -> read store, fill cache with TTL (cached=False)
#   write: write store -> delete every key in the owner's namespace
#
# The cache and the store are not coupled transactionally. A read that
# misses, reads old data, and refills the cache after a concurrent write
# invalidated it leaves a stale entry until its TTL runs out. That bounded
# staleness is accepted; so is indefinite staleness when invalidation
# itself fails (it is logged).
# =============================================================================

import logging
from datetime import date

from pydantic import ValidationError

from app.exceptions import MissingFieldError, TaskNotFoundError
from core.models.task import Task, TaskUpdate, dump_task_list, load_task_list
from core.stores.task_store import TaskStore
from lib.cache import CacheLayer, item_key, list_key, owner_namespace
from lib.utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 300


class TaskService:
    """
    Service for task operations, scoped to one owner per call.

    Every read and mutation takes the caller's owner id; tasks belonging to
    anyone else are reported as not found.
    """

    def __init__(self, store: TaskStore, cache: CacheLayer, cache_ttl: int = DEFAULT_CACHE_TTL):
        self._store = store
        self._cache = cache
        self._cache_ttl = cache_ttl

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_tasks(self, owner_id: str) -> tuple[list[Task], bool]:
        """
        All of the owner's tasks, newest first.

        Returns:
            (tasks, cached) - cached is True when served from the cache
        """
        key = list_key(owner_id)

        result = await self._cache.get(key)
        if result.hit:
            try:
                return load_task_list(result.value), True
            except ValidationError as e:
                logger.warning(f"Discarding unreadable cache entry {key}: {e}")

        tasks = await self._store.find_by_owner(owner_id)
        await self._cache.set_with_ttl(key, dump_task_list(tasks), self._cache_ttl)
        return tasks, False

    async def get_task(self, owner_id: str, task_id: str) -> tuple[Task, bool]:
        """
        One task, if it belongs to the owner.

        Raises:
            TaskNotFoundError: No task with this id for this owner
        """
        key = item_key(owner_id, task_id)

        result = await self._cache.get(key)
        if result.hit:
            try:
                return Task.model_validate_json(result.value), True
            except ValidationError as e:
                logger.warning(f"Discarding unreadable cache entry {key}: {e}")

        task = await self._store.find_by_id(task_id, owner_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        await self._cache.set_with_ttl(key, task.to_cache_bytes(), self._cache_ttl)
        return task, False

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create_task(
        self,
        owner_id: str,
        task_name: str | None,
        due_date: date | None,
        description: str | None = None,
    ) -> Task:
        """
        Persist a new task and invalidate the owner's cache.

        Raises:
            MissingFieldError: task_name or due_date missing
        """
        missing = [name for name, value in (("taskName", task_name), ("dueDate", due_date)) if not value]
        if missing:
            raise MissingFieldError("Task name and due date are required", missing)

        task = await self._store.create(
            owner_id=owner_id,
            task_name=task_name,
            description=description or "",
            due_date=due_date,
            created_at=utcnow(),
        )

        await self.invalidate(owner_id)
        return task

    async def update_task(
        self,
        owner_id: str,
        task_id: str | None,
        changes: TaskUpdate,
    ) -> Task:
        """
        Apply the provided fields to one of the owner's tasks.

        Fields left as None in `changes` are not touched.

        Raises:
            MissingFieldError: task_id missing
            TaskNotFoundError: No task with this id for this owner
        """
        if not task_id:
            raise MissingFieldError("Task ID is required", ["id"])

        task = await self._store.update_by_id(task_id, owner_id, changes.to_db_fields())
        if task is None:
            raise TaskNotFoundError(task_id)

        await self.invalidate(owner_id)
        return task

    async def delete_task(self, owner_id: str, task_id: str | None) -> Task:
        """
        Delete one of the owner's tasks and return it.

        Raises:
            MissingFieldError: task_id missing
            TaskNotFoundError: No task with this id for this owner
        """
        if not task_id:
            raise MissingFieldError("Task ID is required", ["id"])

        task = await self._store.delete_by_id(task_id, owner_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        await self.invalidate(owner_id)
        return task

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    async def invalidate(self, owner_id: str) -> int:
        """Drop the owner's list and item entries. Never raises."""
        return await self._cache.delete_by_prefix(owner_namespace(owner_id))

    async def clear_cache(self, owner_id: str) -> None:
        await self.invalidate(owner_id)
        logger.info(f"Cleared cache for owner: {owner_id}")
