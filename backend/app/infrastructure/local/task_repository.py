"""
SQLite implementation of Task repository.
"""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID, uuid4

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import InfrastructureError
from app.infrastructure.local.database import TaskORM, get_session_factory
from app.interfaces.task_repository import ITaskRepository
from app.models.enums import TaskPriority, TaskStatus
from app.models.recurrence import RecurrencePattern
from app.models.task import Task, TaskBase, TaskCreate


def _uuid_or_none(value: Optional[str]) -> Optional[UUID]:
    return UUID(value) if value else None


def _str_or_none(value: Optional[UUID]) -> Optional[str]:
    return str(value) if value else None


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        return Task(
            id=UUID(orm.id),
            user_id=orm.user_id,
            title=orm.title,
            description=orm.description,
            status=TaskStatus(orm.status),
            priority=TaskPriority(orm.priority),
            due_date=orm.due_date,
            assigned_to=orm.assigned_to,
            category_id=_uuid_or_none(orm.category_id),
            area_id=_uuid_or_none(orm.area_id),
            department_id=_uuid_or_none(orm.department_id),
            created_by=orm.created_by,
            parent_task_id=_uuid_or_none(orm.parent_task_id),
            recurrence=(
                RecurrencePattern.model_validate(orm.recurrence) if orm.recurrence else None
            ),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    def _model_to_orm(self, user_id: str, task: TaskBase) -> TaskORM:
        """Build an ORM row. Persisted tasks keep their ID, others get a new one."""
        task_id = task.id if isinstance(task, Task) else uuid4()
        return TaskORM(
            id=str(task_id),
            user_id=user_id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            priority=task.priority.value,
            due_date=task.due_date,
            assigned_to=task.assigned_to,
            category_id=_str_or_none(task.category_id),
            area_id=_str_or_none(task.area_id),
            department_id=_str_or_none(task.department_id),
            created_by=task.created_by or user_id,
            parent_task_id=_str_or_none(task.parent_task_id),
            recurrence=(
                task.recurrence.model_dump(mode="json", by_alias=True, exclude_none=True)
                if task.recurrence
                else None
            ),
        )

    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """Create a new task."""
        created = await self.create_batch(user_id, [task])
        return created[0]

    async def create_batch(self, user_id: str, tasks: Sequence[TaskBase]) -> list[Task]:
        """Create several tasks in one transaction."""
        if not tasks:
            return []
        async with self._session_factory() as session:
            orms = [self._model_to_orm(user_id, task) for task in tasks]
            try:
                session.add_all(orms)
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise InfrastructureError("Failed to store tasks", details=str(exc)) from exc
            for orm in orms:
                await session.refresh(orm)
            return [self._orm_to_model(orm) for orm in orms]

    async def get(self, user_id: str, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM).where(
                    and_(TaskORM.id == str(task_id), TaskORM.user_id == user_id)
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list_instances(self, user_id: str, parent_task_id: UUID) -> list[Task]:
        """List tasks generated from a template."""
        async with self._session_factory() as session:
            query = (
                select(TaskORM)
                .where(
                    and_(
                        TaskORM.user_id == user_id,
                        TaskORM.parent_task_id == str(parent_task_id),
                    )
                )
                .order_by(TaskORM.due_date.asc())
            )
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
