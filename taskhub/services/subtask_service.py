"""
Subtask business logic service.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.errors import NotFoundError
from taskhub.models.enums import TaskStatus
from taskhub.models.subtask import Subtask
from taskhub.repositories.subtask_repository import SubtaskRepository
from taskhub.repositories.task_repository import TaskRepository
from taskhub.services.status_policy import check_transition
from taskhub.services.task_service import clean_title

logger = logging.getLogger(__name__)


class SubtaskService:
    """Service for subtask business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = SubtaskRepository(db)
        self.tasks = TaskRepository(db)

    async def _require_task(self, task_id: int) -> None:
        if await self.tasks.get_by_id(task_id) is None:
            raise NotFoundError(f"Task {task_id} not found", {"task_id": task_id})

    async def get_subtask(self, subtask_id: int) -> Subtask:
        """Get a subtask by ID, or raise NotFoundError."""
        subtask = await self.repository.get_by_id(subtask_id)
        if subtask is None:
            raise NotFoundError(f"Subtask {subtask_id} not found", {"subtask_id": subtask_id})
        return subtask

    async def create_subtask(self, task_id: int, title: Optional[str], description: Optional[str] = "") -> Subtask:
        """Create a PENDING subtask under an existing task."""
        await self._require_task(task_id)
        subtask = await self.repository.create(task_id, clean_title(title), description or "")
        logger.info("Subtask %s created under task %s", subtask.id, task_id)
        return subtask

    async def list_by_task(self, task_id: int) -> List[Subtask]:
        """List a task's subtasks in creation order; empty for an unknown or deleted task."""
        return await self.repository.list_by_task(task_id)

    async def transition_status(self, subtask_id: int, new_status: Any) -> Subtask:
        """Move a subtask to another status."""
        subtask = await self.get_subtask(subtask_id)
        previous = TaskStatus(subtask.status)
        target = check_transition(previous, new_status)
        subtask = await self.repository.set_status(subtask, target)
        logger.info("Subtask %s status %s -> %s", subtask_id, previous.value, target.value)
        return subtask
