"""
Task router - API endpoints for tasks and their comments.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.clients.user_directory import UserDirectoryClient
from taskhub.core.dependencies import get_actor, get_db, get_user_directory
from taskhub.core.permissions import (
    Actor,
    Roles,
    raise_if_cannot_work_on_task,
    raise_if_not_roles,
)
from taskhub.models.enums import OwnerKind
from taskhub.schemas.comment import CommentBody, CommentRead
from taskhub.schemas.task import (
    StatusChange,
    TaskBoardItem,
    TaskCreate,
    TaskRead,
    TaskStatusSummary,
    TaskUpdate,
)
from taskhub.services.comment_service import CommentService
from taskhub.services.filters import TaskFilters
from taskhub.services.resolver import resolve_label
from taskhub.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


def get_task_filters(
    team: Optional[str] = None,
    project: Optional[str] = None,
    search: Optional[str] = None,
    role: Optional[str] = None,
) -> TaskFilters:
    return TaskFilters(team=team, project=project, search=search, role=role)


@router.get("", response_model=List[TaskRead])
async def list_tasks(
    filters: TaskFilters = Depends(get_task_filters),
    directory: UserDirectoryClient = Depends(get_user_directory),
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    List tasks.

    Filters: team, project (exact), search (title/description/status
    substring, case-insensitive), role (creator or assignee role).
    """
    snapshot = await directory.snapshot() if filters.needs_directory else None
    return await TaskService(db).list_all(filters, snapshot)


@router.get("/summary", response_model=TaskStatusSummary)
async def task_summary(
    filters: TaskFilters = Depends(get_task_filters),
    directory: UserDirectoryClient = Depends(get_user_directory),
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Task counts per status, with the same filters as the task list."""
    snapshot = await directory.snapshot() if filters.needs_directory else None
    return await TaskService(db).status_summary(filters, snapshot)


@router.get("/board", response_model=List[TaskBoardItem])
async def task_board(
    filters: TaskFilters = Depends(get_task_filters),
    directory: UserDirectoryClient = Depends(get_user_directory),
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    Filtered task list with assignee and creator labels from the user directory.

    search also matches the assignee label, so ?search=alice finds the tasks assigned to alice.
    """
    snapshot = await directory.snapshot()
    tasks = await TaskService(db).list_all(filters, snapshot, search_assignees=True)
    return [
        TaskBoardItem(
            **TaskRead.model_validate(task).model_dump(),
            assignee_label=resolve_label(task.assigned_to, snapshot),
            creator_label=resolve_label(task.created_by, snapshot),
        )
        for task in tasks
    ]


@router.get("/assignedTo/{user_id}", response_model=List[TaskRead])
async def list_tasks_for_assignee(
    user_id: int,
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """List tasks assigned to a user."""
    return await TaskService(db).list_by_assignee(user_id)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task. The caller is recorded as its creator."""
    raise_if_not_roles(actor, Roles.MANAGERS, "create tasks")
    task = await TaskService(db).create_task(
        title=data.title,
        description=data.description,
        assigned_to=data.assigned_to,
        due_date=data.due_date,
        team=data.team,
        project=data.project,
        created_by=actor.user_id,
    )
    await db.commit()
    return task


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: int,
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Get a task by ID."""
    return await TaskService(db).get_task(task_id)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Update a task. A status in the body is ignored; use PATCH /status."""
    raise_if_not_roles(actor, Roles.MANAGERS, "edit tasks")
    task = await TaskService(db).update_task(task_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return task


@router.patch("/{task_id}/status", response_model=TaskRead)
async def change_task_status(
    task_id: int,
    new_status: Optional[str] = Query(default=None, alias="status"),
    body: Optional[StatusChange] = Body(default=None),
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    Move a task to another status.

    The status comes from the ?status= query parameter or a {"status": ...}
    body. Allowed for the assignee and for managers.
    """
    service = TaskService(db)
    task = await service.get_task(task_id)
    raise_if_cannot_work_on_task(actor, task, "change this task's status")

    if new_status is None and body is not None:
        new_status = body.status
    task = await service.transition_status(task_id, new_status)
    await db.commit()
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Delete a task together with its subtasks and comments."""
    raise_if_not_roles(actor, Roles.MANAGERS, "delete tasks")
    await TaskService(db).delete_task(task_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{task_id}/comments", response_model=List[CommentRead])
async def list_task_comments(
    task_id: int,
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """List comments on a task, oldest first."""
    await TaskService(db).get_task(task_id)
    return await CommentService(db).list_by_owner(OwnerKind.TASK, task_id)


@router.post("/{task_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def add_task_comment(
    task_id: int,
    data: CommentBody,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Comment on a task as the calling user."""
    comment = await CommentService(db).add_comment(OwnerKind.TASK, task_id, actor.user_id, data.text)
    await db.commit()
    return comment
