"""
Unit tests for Task repository.
"""

from datetime import date, datetime
from unittest.mock import patch
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.core.exceptions import InfrastructureError
from app.infrastructure.local.database import TaskORM
from app.infrastructure.local.task_repository import SqliteTaskRepository
from app.models.enums import TaskPriority, TaskStatus
from app.models.recurrence import RecurrencePattern
from app.models.task import Task, TaskCreate, TaskInstance


@pytest.mark.asyncio
async def test_create_task(session_factory, test_user_id):
    """Test creating a task."""
    repo = SqliteTaskRepository(session_factory=session_factory)
    area_id = uuid4()

    task = await repo.create(
        test_user_id,
        TaskCreate(
            title="Replace light bulbs",
            priority=TaskPriority.LOW,
            due_date=date(2024, 5, 2),
            area_id=area_id,
        ),
    )

    assert task.id is not None
    assert task.user_id == test_user_id
    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.LOW
    assert task.due_date == date(2024, 5, 2)
    assert task.area_id == area_id
    assert task.created_by == test_user_id


@pytest.mark.asyncio
async def test_get_task_is_scoped_to_owner(session_factory, test_user_id):
    """Test that tasks are only visible to their owner."""
    repo = SqliteTaskRepository(session_factory=session_factory)
    created = await repo.create(test_user_id, TaskCreate(title="Private"))

    assert (await repo.get(test_user_id, created.id)).title == "Private"
    assert await repo.get("someone_else", created.id) is None


@pytest.mark.asyncio
async def test_create_batch_keeps_template_id(session_factory, test_user_id):
    """Test that a persisted-shape template keeps its pre-assigned ID."""
    repo = SqliteTaskRepository(session_factory=session_factory)
    template = Task(
        id=uuid4(),
        user_id=test_user_id,
        title="Water plants",
        due_date=date(2024, 1, 1),
        recurrence=RecurrencePattern(frequency="daily", interval=1, skip_weekends=True),
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )
    instance = TaskInstance(
        title="Water plants", due_date=date(2024, 1, 2), parent_task_id=template.id
    )

    stored = await repo.create_batch(test_user_id, [template, instance])

    assert stored[0].id == template.id
    assert stored[0].recurrence.skip_weekends is True
    assert stored[1].id != template.id
    assert stored[1].parent_task_id == template.id


@pytest.mark.asyncio
async def test_create_batch_is_atomic(session_factory, test_user_id):
    """Test that a failing row rolls back the whole batch."""
    repo = SqliteTaskRepository(session_factory=session_factory)
    good = TaskCreate(title="Fine")
    bad = TaskCreate(title=None)  # title is NOT NULL

    with pytest.raises(InfrastructureError):
        await repo.create_batch(test_user_id, [good, bad])

    async with session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(TaskORM))
    assert count == 0


@pytest.mark.asyncio
async def test_create_batch_wraps_database_errors(session_factory, test_user_id):
    """Test that driver errors surface as InfrastructureError."""
    repo = SqliteTaskRepository(session_factory=session_factory)
    error = OperationalError("INSERT", {}, Exception("disk I/O error"))

    with patch("sqlalchemy.ext.asyncio.AsyncSession.commit", side_effect=error):
        with pytest.raises(InfrastructureError, match="Failed to store tasks"):
            await repo.create_batch(test_user_id, [TaskCreate(title="Lost")])


@pytest.mark.asyncio
async def test_create_batch_empty(session_factory, test_user_id):
    repo = SqliteTaskRepository(session_factory=session_factory)
    assert await repo.create_batch(test_user_id, []) == []


@pytest.mark.asyncio
async def test_list_instances_ordered_by_due_date(session_factory, test_user_id):
    """Test listing instances of a template."""
    repo = SqliteTaskRepository(session_factory=session_factory)
    parent_id = uuid4()
    await repo.create_batch(
        test_user_id,
        [
            TaskInstance(title="B", due_date=date(2024, 1, 9), parent_task_id=parent_id),
            TaskInstance(title="A", due_date=date(2024, 1, 2), parent_task_id=parent_id),
            TaskInstance(title="Other", due_date=date(2024, 1, 1), parent_task_id=uuid4()),
        ],
    )

    listed = await repo.list_instances(test_user_id, parent_id)

    assert [t.title for t in listed] == ["A", "B"]
    assert await repo.list_instances("someone_else", parent_id) == []
