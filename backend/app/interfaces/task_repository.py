"""
Task repository interface.

Defines the contract for task persistence operations.
Implementations: SQLite
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from app.models.task import Task, TaskBase, TaskCreate


class ITaskRepository(ABC):
    """Abstract interface for task persistence."""

    @abstractmethod
    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            user_id: Owner user ID
            task: Task creation data

        Returns:
            Created task with generated ID and timestamps
        """
        pass

    @abstractmethod
    async def create_batch(self, user_id: str, tasks: Sequence[TaskBase]) -> list[Task]:
        """
        Create several tasks in a single transaction.

        Items that are already a Task keep their ID; others get a new one.
        Either every task is stored or none is.

        Args:
            user_id: Owner user ID
            tasks: Tasks to store

        Returns:
            Stored tasks, in the order given

        Raises:
            InfrastructureError: If the batch could not be stored
        """
        pass

    @abstractmethod
    async def get(self, user_id: str, task_id: UUID) -> Optional[Task]:
        """
        Get a task by ID.

        Args:
            user_id: Owner user ID
            task_id: Task ID

        Returns:
            Task if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_instances(self, user_id: str, parent_task_id: UUID) -> list[Task]:
        """
        List tasks generated from a template, ordered by due date.

        Args:
            user_id: Owner user ID
            parent_task_id: Template task ID
        """
        pass
