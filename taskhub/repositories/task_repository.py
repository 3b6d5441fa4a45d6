"""
Task repository - database operations for Task.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.models.enums import TaskStatus
from taskhub.models.task import Task


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Task]:
        """List every task in id order."""
        result = await self.db.execute(select(Task).order_by(Task.id.asc()))
        return list(result.scalars().all())

    async def list_by_assignee(self, user_id: int) -> List[Task]:
        """List tasks assigned to a user."""
        result = await self.db.execute(
            select(Task)
            .where(Task.assigned_to == user_id)
            .order_by(Task.id.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        """Get a task by ID."""
        result = await self.db.execute(
            select(Task).where(Task.id == task_id)
        )
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> Task:
        """Create a new task in PENDING."""
        task = Task(status=TaskStatus.PENDING, **fields)
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)
        return task

    async def update(self, task: Task, changes: Dict[str, Any]) -> Task:
        """Apply already-validated field changes to a task."""
        for field, value in changes.items():
            setattr(task, field, value)

        await self.db.flush()
        await self.db.refresh(task)
        return task

    async def set_status(self, task: Task, status: TaskStatus) -> Task:
        """Persist a new status for a task."""
        task.status = status
        await self.db.flush()
        await self.db.refresh(task)
        return task

    async def delete(self, task_id: int) -> None:
        """Remove a task row permanently."""
        await self.db.execute(delete(Task).where(Task.id == task_id))
        await self.db.flush()
