"""
Subtask router - API endpoints for subtasks and their comments.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.core.dependencies import get_actor, get_db
from taskhub.core.permissions import Actor, raise_if_cannot_work_on_task
from taskhub.models.enums import OwnerKind
from taskhub.schemas.comment import CommentBody, CommentRead
from taskhub.schemas.subtask import SubtaskCreate, SubtaskRead
from taskhub.schemas.task import StatusChange
from taskhub.services.comment_service import CommentService
from taskhub.services.subtask_service import SubtaskService
from taskhub.services.task_service import TaskService

router = APIRouter(prefix="/api/subtasks", tags=["Subtasks"])


@router.get("/task/{task_id}", response_model=List[SubtaskRead])
async def list_subtasks(
    task_id: int,
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """List a task's subtasks in creation order."""
    return await SubtaskService(db).list_by_task(task_id)


@router.post("/{task_id}", response_model=SubtaskRead, status_code=status.HTTP_201_CREATED)
async def create_subtask(
    task_id: int,
    data: SubtaskCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Create a subtask under a task. Allowed for the task's assignee and for managers."""
    task = await TaskService(db).get_task(task_id)
    raise_if_cannot_work_on_task(actor, task, "add subtasks to this task")

    subtask = await SubtaskService(db).create_subtask(task_id, data.title, data.description)
    await db.commit()
    return subtask


@router.get("/{subtask_id}", response_model=SubtaskRead)
async def get_subtask(
    subtask_id: int,
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Get a subtask by ID."""
    return await SubtaskService(db).get_subtask(subtask_id)


@router.patch("/{subtask_id}/status", response_model=SubtaskRead)
async def change_subtask_status(
    subtask_id: int,
    new_status: Optional[str] = Query(default=None, alias="status"),
    body: Optional[StatusChange] = Body(default=None),
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Move a subtask to another status (?status= or {"status": ...})."""
    service = SubtaskService(db)
    subtask = await service.get_subtask(subtask_id)
    task = await TaskService(db).get_task(subtask.task_id)
    raise_if_cannot_work_on_task(actor, task, "change this subtask's status")

    if new_status is None and body is not None:
        new_status = body.status
    subtask = await service.transition_status(subtask_id, new_status)
    await db.commit()
    return subtask


@router.get("/{subtask_id}/comments", response_model=List[CommentRead])
async def list_subtask_comments(
    subtask_id: int,
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """List comments on a subtask, oldest first."""
    await SubtaskService(db).get_subtask(subtask_id)
    return await CommentService(db).list_by_owner(OwnerKind.SUBTASK, subtask_id)


@router.post("/{subtask_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def add_subtask_comment(
    subtask_id: int,
    data: CommentBody,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Comment on a subtask as the calling user."""
    comment = await CommentService(db).add_comment(OwnerKind.SUBTASK, subtask_id, actor.user_id, data.text)
    await db.commit()
    return comment
