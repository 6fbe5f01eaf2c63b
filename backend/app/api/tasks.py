"""
Task API endpoints.
"""

from typing import Any, Optional, Union
from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.api.deps import CurrentUser, RecurringTasks
from app.models.recurrence import RecurrencePattern
from app.models.task import Task, TaskCreate, TaskInstance

router = APIRouter()


class RecurringTaskRequest(BaseModel):
    """Template task plus the rule that repeats it."""

    task: TaskCreate
    # Rules that do not parse are kept as raw dicts and rejected by the
    # service with the usual error body.
    recurrence: Optional[Union[RecurrencePattern, dict[str, Any]]] = Field(
        None, union_mode="left_to_right", description="Recurrence rule"
    )


@router.post("/recurring", response_model=list[Task])
async def create_recurring_task(
    payload: RecurringTaskRequest,
    user: CurrentUser,
    service: RecurringTasks,
) -> list[Task]:
    """Create a recurring task and store its generated instances."""
    return await service.create_recurring(user.id, payload.task, payload.recurrence)


@router.post("/recurring/preview", response_model=list[TaskInstance])
async def preview_recurring_task(
    payload: RecurringTaskRequest,
    user: CurrentUser,
    service: RecurringTasks,
) -> list[TaskInstance]:
    """Expand a recurring task without storing it."""
    return service.preview(user.id, payload.task, payload.recurrence)


@router.get("/{task_id}/instances", response_model=list[Task])
async def list_task_instances(
    task_id: UUID,
    user: CurrentUser,
    service: RecurringTasks,
) -> list[Task]:
    """List the stored instances generated from a template task."""
    return await service.list_instances(user.id, task_id)
