"""
Subtask repository - database operations for Subtask.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.models.enums import TaskStatus
from taskhub.models.subtask import Subtask


class SubtaskRepository:
    """Repository for Subtask database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_task(self, task_id: int) -> List[Subtask]:
        """List a task's subtasks in creation order."""
        result = await self.db.execute(
            select(Subtask)
            .where(Subtask.task_id == task_id)
            .order_by(Subtask.id.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, subtask_id: int) -> Optional[Subtask]:
        """Get a subtask by ID."""
        result = await self.db.execute(
            select(Subtask).where(Subtask.id == subtask_id)
        )
        return result.scalar_one_or_none()

    async def create(self, task_id: int, title: str, description: str) -> Subtask:
        """Create a new PENDING subtask under a task."""
        subtask = Subtask(
            task_id=task_id,
            title=title,
            description=description,
            status=TaskStatus.PENDING,
        )
        self.db.add(subtask)
        await self.db.flush()
        await self.db.refresh(subtask)
        return subtask

    async def set_status(self, subtask: Subtask, status: TaskStatus) -> Subtask:
        """Persist a new status for a subtask."""
        subtask.status = status
        await self.db.flush()
        await self.db.refresh(subtask)
        return subtask

    async def delete_for_task(self, task_id: int) -> int:
        """Delete every subtask of a task. Returns the number of rows removed."""
        result = await self.db.execute(
            delete(Subtask).where(Subtask.task_id == task_id)
        )
        await self.db.flush()
        return result.rowcount or 0
