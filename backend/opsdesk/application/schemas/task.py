"""Pydantic DTOs for tasks."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from opsdesk.domain.entities import TaskPriority, TaskStatus

from .files import AttachmentSchema


class TaskCreate(BaseModel):
    """Schema for creating a new task; new tasks always start as ``pending``."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Renew SSL certificate"])
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    assignee: str = Field(..., min_length=1, max_length=36)


class TaskUpdate(BaseModel):
    """Schema for updating a task — all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    assignee: str | None = Field(None, min_length=1, max_length=36)


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskShare(BaseModel):
    """Copy a task to another assignee, optionally with a note."""

    assignee: str = Field(..., min_length=1, max_length=36)
    message: str | None = None


class TaskResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    description: str | None = None
    status: str
    priority: str
    due_date: date | None = None
    assignee: str | None = None
    assignee_name: str | None = None
    assignee_photo: str | None = None
    attachments: list[AttachmentSchema] = Field(default_factory=list)
    completed_on: datetime | None = None
    shared_from: str | None = None
    share_message: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskStats(BaseModel):
    total: int
    pending: int
    in_progress: int
    completed: int
    overdue: int
