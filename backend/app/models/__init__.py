"""Pydantic models (schemas) for the application."""

from app.models.enums import RecurrenceFrequency, TaskPriority, TaskStatus
from app.models.recurrence import RecurrencePattern
from app.models.task import Task, TaskCreate, TaskInstance, TaskTemplate

__all__ = [
    # Enums
    "TaskStatus",
    "TaskPriority",
    "RecurrenceFrequency",
    # Recurrence
    "RecurrencePattern",
    # Task
    "Task",
    "TaskCreate",
    "TaskInstance",
    "TaskTemplate",
]
