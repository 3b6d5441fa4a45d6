"""
Task business logic service.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.errors import NotFoundError, ValidationError
from taskhub.models.base_model import TITLE_MAX_LENGTH
from taskhub.models.enums import OwnerKind, TaskStatus
from taskhub.models.task import Task
from taskhub.repositories.comment_repository import CommentRepository
from taskhub.repositories.subtask_repository import SubtaskRepository
from taskhub.repositories.task_repository import TaskRepository
from taskhub.services.filters import TaskFilters, apply_filters, summarize_statuses
from taskhub.services.resolver import UserDirectorySnapshot
from taskhub.services.status_policy import check_transition
from taskhub.utils.time import parse_due_date

logger = logging.getLogger(__name__)

# Fields update_task may change. Status has its own operation.
MUTABLE_FIELDS = ("title", "description", "assigned_to", "due_date", "team", "project")


def clean_title(value: Any) -> str:
    """Stripped title; ValidationError when blank or wider than the column."""
    if value is None or not str(value).strip():
        raise ValidationError("Title is required", {"field": "title"})
    title = str(value).strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters",
            {"field": "title", "max_length": TITLE_MAX_LENGTH},
        )
    return title


def _clean_due_date(value: Any) -> date:
    try:
        due = parse_due_date(value)
    except ValueError:
        raise ValidationError(f"'{value}' is not a valid due date", {"field": "due_date"}) from None
    if due is None:
        raise ValidationError("Due date is required", {"field": "due_date"})
    return due


def _clean_label(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class TaskService:
    """Service for task business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = TaskRepository(db)
        self.subtasks = SubtaskRepository(db)
        self.comments = CommentRepository(db)

    async def get_task(self, task_id: int) -> Task:
        """Get a task by ID, or raise NotFoundError."""
        task = await self.repository.get_by_id(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found", {"task_id": task_id})
        return task

    async def create_task(
        self,
        *,
        title: Optional[str],
        due_date: Any,
        created_by: int,
        description: Optional[str] = "",
        assigned_to: Optional[int] = None,
        team: Optional[str] = None,
        project: Optional[str] = None,
    ) -> Task:
        """Create a new task. It always starts PENDING."""
        task = await self.repository.create(
            title=clean_title(title),
            description=description or "",
            due_date=_clean_due_date(due_date),
            created_by=created_by,
            assigned_to=assigned_to,
            team=_clean_label(team),
            project=_clean_label(project),
        )
        logger.info("Task %s created by user %s", task.id, created_by)
        return task

    async def update_task(self, task_id: int, fields: Mapping[str, Any]) -> Task:
        """
        Update any subset of a task's mutable fields.

        Everything is validated before anything is applied, so a rejected
        update leaves the task untouched.
        """
        task = await self.get_task(task_id)

        unknown = sorted(set(fields) - set(MUTABLE_FIELDS))
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(unknown)}",
                {"fields": unknown},
            )

        changes: Dict[str, Any] = {}
        for field, value in fields.items():
            if field == "title":
                changes[field] = clean_title(value)
            elif field == "due_date":
                changes[field] = _clean_due_date(value)
            elif field in ("team", "project"):
                changes[field] = _clean_label(value)
            elif field == "description":
                changes[field] = value or ""
            else:
                changes[field] = value

        return await self.repository.update(task, changes)

    async def transition_status(self, task_id: int, new_status: Any) -> Task:
        """Move a task to another status."""
        task = await self.get_task(task_id)
        previous = TaskStatus(task.status)
        target = check_transition(previous, new_status)
        task = await self.repository.set_status(task, target)
        logger.info("Task %s status %s -> %s", task_id, previous.value, target.value)
        return task

    async def delete_task(self, task_id: int) -> None:
        """
        Delete a task permanently.

        Its subtasks, the comments on those subtasks and the comments on the
        task itself are removed in the same unit of work.
        """
        await self.get_task(task_id)

        subtask_ids = [subtask.id for subtask in await self.subtasks.list_by_task(task_id)]
        removed_comments = await self.comments.delete_for_owners(OwnerKind.SUBTASK, subtask_ids)
        removed_comments += await self.comments.delete_for_owners(OwnerKind.TASK, [task_id])
        await self.subtasks.delete_for_task(task_id)
        await self.repository.delete(task_id)

        logger.info(
            "Task %s deleted with %d subtask(s) and %d comment(s)",
            task_id,
            len(subtask_ids),
            removed_comments,
        )

    async def list_by_assignee(self, user_id: int) -> List[Task]:
        """List tasks assigned to a user; empty when there are none."""
        return await self.repository.list_by_assignee(user_id)

    async def list_all(
        self,
        filters: Optional[TaskFilters] = None,
        directory: Optional[UserDirectorySnapshot] = None,
        search_assignees: bool = False,
    ) -> List[Task]:
        """List all tasks, optionally filtered."""
        tasks = await self.repository.list_all()
        return apply_filters(tasks, filters, directory, search_assignees=search_assignees)

    async def status_summary(
        self,
        filters: Optional[TaskFilters] = None,
        directory: Optional[UserDirectorySnapshot] = None,
    ) -> Dict[str, object]:
        """Count the (filtered) tasks per status."""
        return summarize_statuses(await self.list_all(filters, directory))
