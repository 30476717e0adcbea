# =============================================================================
# core/stores/task_store.py - Task Store
# =============================================================================
# Persists task records in the `tasks` table:
#   id uuid primary key default gen_random_uuid()
#   task_name text not null
#   description text not null default ''
#   due_date date not null
#   user_id uuid not null references users(id)
#   created_at timestamptz not null
#
# Every lookup and mutation is filtered by both id and user_id, so one
# owner can never read or change another owner's rows.
# =============================================================================

import logging
from datetime import date, datetime
from typing import Any

from core.models.task import Task
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_valid_uuid

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"


class TaskStore:
    """create / find-by-owner / find-by-id / update-by-id / delete-by-id."""

    def __init__(self, client: SupabaseClient):
        self._client = client

    async def create(
        self,
        owner_id: str,
        task_name: str,
        description: str,
        due_date: date,
        created_at: datetime,
    ) -> Task:
        data = {
            "task_name": task_name,
            "description": description,
            "due_date": due_date.isoformat(),
            "user_id": owner_id,
            "created_at": created_at.isoformat(),
        }

        try:
            response = await self._client.table(TASKS_TABLE).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create task: {e}",
                code="CREATE_TASK_FAILED",
                details={"owner_id": owner_id},
            )

        if not response.data:
            raise SupabaseClientError(message="Insert returned no data", code="CREATE_TASK_FAILED")

        task = Task.from_db_row(response.data[0])
        logger.info(f"Created task: {task.id} for owner: {owner_id}")
        return task

    async def find_by_owner(self, owner_id: str) -> list[Task]:
        """All tasks for an owner, newest first."""
        try:
            response = await (
                self._client.table(TASKS_TABLE)
                .select("*")
                .eq("user_id", owner_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list tasks: {e}",
                code="LIST_TASKS_FAILED",
                details={"owner_id": owner_id},
            )

        return [Task.from_db_row(row) for row in response.data or []]

    async def find_by_id(self, task_id: str, owner_id: str) -> Task | None:
        if not is_valid_uuid(task_id):
            return None

        try:
            response = await (
                self._client.table(TASKS_TABLE)
                .select("*")
                .eq("id", task_id)
                .eq("user_id", owner_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch task: {e}",
                code="FETCH_TASK_FAILED",
                details={"task_id": task_id},
            )

        rows = response.data or []
        return Task.from_db_row(rows[0]) if rows else None

    async def update_by_id(
        self,
        task_id: str,
        owner_id: str,
        fields: dict[str, Any],
    ) -> Task | None:
        """
        Apply `fields` (store column names) to one task.

        Returns the updated task, or None if no task matched. An empty
        `fields` dict returns the current record unchanged.
        """
        if not fields:
            return await self.find_by_id(task_id, owner_id)
        if not is_valid_uuid(task_id):
            return None

        try:
            response = await (
                self._client.table(TASKS_TABLE)
                .update(fields)
                .eq("id", task_id)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update task: {e}",
                code="UPDATE_TASK_FAILED",
                details={"task_id": task_id},
            )

        rows = response.data or []
        if not rows:
            return None

        logger.info(f"Updated task: {task_id}")
        return Task.from_db_row(rows[0])

    async def delete_by_id(self, task_id: str, owner_id: str) -> Task | None:
        """Delete one task. Returns the deleted record, or None if no match."""
        if not is_valid_uuid(task_id):
            return None

        try:
            response = await (
                self._client.table(TASKS_TABLE)
                .delete()
                .eq("id", task_id)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete task: {e}",
                code="DELETE_TASK_FAILED",
                details={"task_id": task_id},
            )

        rows = response.data or []
        if not rows:
            return None

        logger.info(f"Deleted task: {task_id}")
        return Task.from_db_row(rows[0])
