# File: app/schemas/task.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.base import as_utc
from app.models.task import Task, TaskPriority, TaskStatus
from app.schemas.base import CamelModel


def parse_status(value: str) -> TaskStatus:
    """
    Match a status string case-insensitively ("completed", "In_Progress").

    Raises ValueError for anything outside the enum.
    """
    try:
        return TaskStatus(value.strip().upper())
    except (AttributeError, ValueError):
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValueError(f"Invalid status {value!r}. Allowed values: {allowed}")


# -----------------------------
# Requests
# -----------------------------

class TaskRequest(CamelModel):
    title: str = Field(max_length=255)
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime
    assignee_id: Optional[int] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("status", "priority", mode="before")
    @classmethod
    def upper_case_enums(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class TaskStatusUpdate(CamelModel):
    status: str


class TaskAssignRequest(CamelModel):
    assignee_id: int


# -----------------------------
# Responses
# -----------------------------

class TaskRead(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    author_id: int
    author_name: str
    assignee_id: Optional[int] = None
    assignee_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    due_date: Optional[datetime] = None

    @classmethod
    def from_task(cls, task: Task) -> TaskRead:
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            author_id=task.author_id,
            author_name=task.author.full_name,
            assignee_id=task.assignee_id,
            assignee_name=task.assignee.full_name if task.assignee else None,
            created_at=task.created_at,
            updated_at=task.updated_at,
            due_date=task.due_date,
        )
