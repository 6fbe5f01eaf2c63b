"""
Task model definitions.

A recurring task is stored as a template task carrying its recurrence rule;
each generated instance points back to it through parent_task_id.
"""

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import TaskPriority, TaskStatus
from app.models.recurrence import RecurrencePattern, date_from_timestamp


class TaskBase(BaseModel):
    """Base task fields shared across create/read."""

    title: Optional[str] = Field(None, max_length=500, description="Task title")
    description: Optional[str] = Field(None, max_length=2000)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = Field(None, description="Due date (anchor for recurrence)")
    assigned_to: Optional[str] = Field(None, description="Assignee user ID")
    category_id: Optional[UUID] = None
    area_id: Optional[UUID] = None
    department_id: Optional[UUID] = None
    created_by: Optional[str] = None
    parent_task_id: Optional[UUID] = Field(
        None, description="Template task this instance was generated from"
    )
    recurrence: Optional[RecurrencePattern] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date_from_timestamp(cls, value: Any) -> Any:
        return date_from_timestamp(value)


class TaskCreate(TaskBase):
    """Task creation payload."""

    pass


class TaskInstance(TaskBase):
    """Generated task pending insertion. Has no identifier of its own."""

    pass


class Task(TaskBase):
    """Persisted task."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    title: str = Field(..., min_length=1, max_length=500)
    created_at: datetime
    updated_at: datetime


# The expander reads a persisted-shape task as its template.
TaskTemplate = Task
