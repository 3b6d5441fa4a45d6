"""Comment store behaviour against an in-memory database."""

import pytest

from taskhub.errors import NotFoundError, ValidationError
from taskhub.models.enums import OwnerKind
from taskhub.services.comment_service import CommentService
from taskhub.services.subtask_service import SubtaskService
from taskhub.services.task_service import TaskService


@pytest.mark.asyncio
async def test_lifecycle_scenario(db):
    tasks = TaskService(db)
    task = await tasks.create_task(title="T1", due_date="2025-01-01", created_by=2)
    assert task.id == 1
    assert task.status.value == "PENDING"

    task = await tasks.transition_status(1, "IN_PROGRESS")
    assert task.status.value == "IN_PROGRESS"

    subtask = await SubtaskService(db).create_subtask(1, "S1", "desc")
    assert (subtask.id, subtask.task_id, subtask.status.value) == (1, 1, "PENDING")

    comments = CommentService(db)
    await comments.add_comment(OwnerKind.SUBTASK, 1, 5, "looks good")
    listed = await comments.list_by_owner(OwnerKind.SUBTASK, 1)
    assert [c.text for c in listed] == ["looks good"]
    assert listed[0].author_id == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", None])
async def test_empty_comment_is_rejected_without_a_row(db, make_task, text):
    task = await make_task()
    service = CommentService(db)
    before = len(await service.list_by_owner(OwnerKind.TASK, task.id))

    with pytest.raises(ValidationError):
        await service.add_comment(OwnerKind.TASK, task.id, 1, text)

    assert len(await service.list_by_owner(OwnerKind.TASK, task.id)) == before


@pytest.mark.asyncio
async def test_owner_must_exist_with_the_stated_kind(db, make_task):
    task = await make_task()
    service = CommentService(db)

    # Task 1 exists, but there is no subtask 1
    with pytest.raises(NotFoundError) as exc_info:
        await service.add_comment(OwnerKind.SUBTASK, task.id, 1, "hello")
    assert exc_info.value.details == {"owner_kind": "SUBTASK", "owner_id": task.id}

    with pytest.raises(NotFoundError):
        await service.add_comment(OwnerKind.TASK, task.id + 1, 1, "hello")


@pytest.mark.asyncio
async def test_task_and_subtask_comments_are_separate(db, make_task):
    task = await make_task()
    subtask = await SubtaskService(db).create_subtask(task.id, "S1", "")
    service = CommentService(db)

    await service.add_comment("task", task.id, 1, "task note")
    await service.add_comment("SUBTASK", subtask.id, 1, "subtask note")

    assert [c.text for c in await service.list_by_owner(OwnerKind.TASK, task.id)] == ["task note"]
    assert [c.text for c in await service.list_by_owner(OwnerKind.SUBTASK, subtask.id)] == ["subtask note"]


@pytest.mark.asyncio
async def test_comments_listed_oldest_first_and_stripped(db, make_task):
    task = await make_task()
    service = CommentService(db)

    for text in ("first", "  second  ", "third"):
        await service.add_comment(OwnerKind.TASK, task.id, 1, text)

    assert [c.text for c in await service.list_by_owner(OwnerKind.TASK, task.id)] == ["first", "second", "third"]


@pytest.mark.asyncio
async def test_unknown_owner_kind(db):
    with pytest.raises(ValidationError):
        await CommentService(db).list_by_owner("PROJECT", 1)
