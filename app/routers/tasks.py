# =============================================================================
# app/routers/tasks.py - Task CRUD Endpoints
# =============================================================================
# All endpoints require a bearer token. Every operation is scoped to the
# authenticated owner; other owners' tasks are reported as 404.
#
# Reads report `cached: true` when served from Redis.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from app.dependencies import TaskServiceDep
from core.models import CamelModel, DueDate, Task, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class TaskCreateRequest(CamelModel):
    """Body for POST /tasks. Presence of required fields is checked by the service."""
    task_name: str | None = None
    description: str | None = None
    due_date: DueDate | None = None

    model_config = {
        "json_schema_extra": {
            "example": {"taskName": "buy milk", "description": "2 litres", "dueDate": "2025-01-01"}
        }
    }


class TaskUpdateRequest(CamelModel):
    """Body for POST /tasks/update. Omitted fields are left unchanged."""
    id: str | None = None
    task_name: str | None = None
    description: str | None = None
    due_date: DueDate | None = None


class TaskIdRequest(CamelModel):
    """Body for POST /tasks/delete."""
    id: str | None = None


class MessageResponse(CamelModel):
    message: str


class TaskResponse(CamelModel):
    message: str
    task: Task


class TaskDetailResponse(CamelModel):
    message: str
    task: Task
    cached: bool


class TaskListResponse(CamelModel):
    message: str
    tasks: list[Task]
    cached: bool


def _retrieved(what: str, cached: bool) -> str:
    return f"{what} retrieved successfully (from cache)" if cached else f"{what} retrieved successfully"


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: TaskCreateRequest,
    tasks: TaskServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a task for the authenticated user.

    taskName and dueDate are required; description defaults to "".
    """
    task = await tasks.create_task(
        owner_id=user.id,
        task_name=body.task_name,
        due_date=body.due_date,
        description=body.description,
    )
    return TaskResponse(message="Task created successfully", task=task)


@router.get("/tasks", response_model=TaskListResponse)
async def list_tasks(
    tasks: TaskServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    List the authenticated user's tasks, newest first.
    """
    items, cached = await tasks.list_tasks(user.id)
    return TaskListResponse(message=_retrieved("Tasks", cached), tasks=items, cached=cached)


@router.get("/tasks/{task_id}", response_model=TaskDetailResponse)
async def get_task(
    task_id: Annotated[str, Path(description="Task ID")],
    tasks: TaskServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get one of the authenticated user's tasks.
    """
    task, cached = await tasks.get_task(user.id, task_id)
    return TaskDetailResponse(message=_retrieved("Task", cached), task=task, cached=cached)


@router.post("/tasks/update", response_model=TaskResponse)
async def update_task(
    body: TaskUpdateRequest,
    tasks: TaskServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update a task. Only the fields present in the body are changed.
    """
    changes = TaskUpdate(
        task_name=body.task_name,
        description=body.description,
        due_date=body.due_date,
    )
    task = await tasks.update_task(user.id, body.id, changes)
    return TaskResponse(message="Task updated successfully", task=task)


@router.post("/tasks/delete", response_model=TaskResponse)
async def delete_task(
    body: TaskIdRequest,
    tasks: TaskServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a task and return the deleted record.
    """
    task = await tasks.delete_task(user.id, body.id)
    return TaskResponse(message="Task deleted successfully", task=task)


@router.post("/clear-cache", response_model=MessageResponse)
async def clear_cache(
    tasks: TaskServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Drop every cached entry for the authenticated user.

    Always succeeds; a cache failure is only logged.
    """
    await tasks.clear_cache(user.id)
    return MessageResponse(message="Cache cleared successfully for user")
