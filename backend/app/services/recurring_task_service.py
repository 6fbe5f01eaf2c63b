"""
Recurring task service.

Creates a template task together with the instances its recurrence rule
generates, stored as one atomic batch.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.holiday_calendar import IHolidayCalendar
from app.interfaces.task_repository import ITaskRepository
from app.models.task import Task, TaskCreate, TaskInstance
from app.services.recurrence_expander import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MAX_OCCURRENCES,
    RecurrenceInput,
    coerce_recurrence_pattern,
    expand_recurrence,
)

logger = setup_logger(__name__)


class RecurringTaskService:
    """Service for creating recurring tasks and their instances."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        holiday_calendar: Optional[IHolidayCalendar] = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        default_max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
    ):
        self.task_repo = task_repo
        self.holiday_calendar = holiday_calendar
        self.max_iterations = max_iterations
        self.default_max_occurrences = default_max_occurrences

    def preview(
        self, user_id: str, task: TaskCreate, recurrence: RecurrenceInput
    ) -> list[TaskInstance]:
        """Expand a recurring task without storing anything."""
        template = self._build_template(user_id, task)
        return self._expand(template, recurrence)

    async def create_recurring(
        self, user_id: str, task: TaskCreate, recurrence: RecurrenceInput
    ) -> list[Task]:
        """Store the template task and its generated instances.

        Validation happens before anything is written; the template and all
        instances are then stored in a single transaction.

        Returns:
            The stored instances, ordered by due date
        """
        template = self._build_template(user_id, task)
        instances = self._expand(template, recurrence)
        template = template.model_copy(
            update={"recurrence": coerce_recurrence_pattern(recurrence)}
        )

        stored = await self.task_repo.create_batch(user_id, [template, *instances])
        logger.info(
            "Created recurring task %s with %d instances for user %s",
            template.id,
            len(instances),
            user_id,
        )
        return stored[1:]

    async def list_instances(self, user_id: str, task_id: UUID) -> list[Task]:
        """List the stored instances of a template task."""
        template = await self.task_repo.get(user_id, task_id)
        if not template:
            raise NotFoundError(f"Task {task_id} not found")
        return await self.task_repo.list_instances(user_id, task_id)

    def _expand(self, template: Task, recurrence: RecurrenceInput) -> list[TaskInstance]:
        return expand_recurrence(
            template,
            recurrence,
            holiday_calendar=self.holiday_calendar,
            max_iterations=self.max_iterations,
            default_max_occurrences=self.default_max_occurrences,
        )

    @staticmethod
    def _build_template(user_id: str, task: TaskCreate) -> Task:
        """Give the submitted task an ID so instances can reference it."""
        if not task.title:
            raise ValidationError("Datos incompletos")
        now = datetime.utcnow()
        data = task.model_dump(exclude={"recurrence", "created_by"})
        return Task(
            **data,
            id=uuid4(),
            user_id=user_id,
            created_by=user_id,
            created_at=now,
            updated_at=now,
        )
