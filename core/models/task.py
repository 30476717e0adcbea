# =============================================================================
# core/models/task.py - Task Schemas
# =============================================================================
# These models define the task record and its wire format:
# - Task: A stored task (returned by the API and cached as JSON)
# - TaskUpdate: Partial update - only provided fields are applied
#
# Field names are snake_case in Python and in the store; the API and the
# cache use camelCase (taskName, dueDate, userId, createdAt).
# =============================================================================

from datetime import date, datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for models serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Task(CamelModel):
    """
    A task owned by exactly one user.

    Example (wire format):
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "taskName": "buy milk",
            "description": "",
            "dueDate": "2025-01-01",
            "userId": "660e8400-e29b-41d4-a716-446655440001",
            "createdAt": "2024-12-30T10:30:00Z"
        }
    """

    id: str = Field(..., description="Store-assigned task identifier")

    task_name: str = Field(..., min_length=1, description="Short task title")

    description: str = Field(default="", description="Optional free text")

    due_date: date = Field(..., description="Date the task is due")

    # Owner - set once at creation, never reassigned
    user_id: str = Field(..., description="ID of the owning user")

    created_at: datetime = Field(..., description="Server-assigned creation time")

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Task":
        """Build a Task from a store row (snake_case columns)."""
        return cls(
            id=str(row["id"]),
            task_name=row["task_name"],
            description=row.get("description") or "",
            due_date=row["due_date"],
            user_id=str(row["user_id"]),
            created_at=row["created_at"],
        )

    def to_cache_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


TaskList = TypeAdapter(list[Task])


_TIMESTAMP = TypeAdapter(datetime)


def _due_date_from_timestamp(value: Any) -> Any:
    """
    Accept a full timestamp ("2025-01-01T10:30:00.000Z") for a due date.

    Aware timestamps are converted to UTC before the date is taken.
    Plain dates pass through to normal date validation.
    """
    if isinstance(value, str) and "T" in value:
        try:
            value = _TIMESTAMP.validate_python(value)
        except ValidationError:
            raise ValueError("dueDate must be a date or an ISO 8601 timestamp")
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


# Request-side due date: a calendar date or a timestamp reduced to its date
DueDate = Annotated[date, BeforeValidator(_due_date_from_timestamp)]


def dump_task_list(tasks: list[Task]) -> bytes:
    """Serialize a task list to the cached JSON snapshot."""
    return TaskList.dump_json(tasks, by_alias=True)


def load_task_list(raw: bytes) -> list[Task]:
    """Parse a cached JSON snapshot back into tasks."""
    return TaskList.validate_json(raw)


class TaskUpdate(BaseModel):
    """
    Partial update for a task.

    None means "leave unchanged". An empty description is a real value
    and clears the field.
    """

    task_name: str | None = None
    description: str | None = None
    due_date: DueDate | None = None

    def to_db_fields(self) -> dict[str, Any]:
        """Store columns to write, omitting fields that were not provided."""
        fields: dict[str, Any] = {}
        if self.task_name:
            fields["task_name"] = self.task_name
        if self.description is not None:
            fields["description"] = self.description
        if self.due_date is not None:
            fields["due_date"] = self.due_date.isoformat()
        return fields
