"""Task store behaviour against an in-memory database."""

from datetime import date

import pytest

from taskhub.errors import InvalidTransitionError, NotFoundError, ValidationError
from taskhub.models.base_model import TITLE_MAX_LENGTH
from taskhub.models.enums import OwnerKind, TaskStatus
from taskhub.services.comment_service import CommentService
from taskhub.services.filters import TaskFilters
from taskhub.services.subtask_service import SubtaskService
from taskhub.services.task_service import TaskService


@pytest.mark.asyncio
async def test_create_then_get_echoes_fields_and_starts_pending(db, make_task):
    created = await make_task()

    task = await TaskService(db).get_task(created.id)
    assert task.status is TaskStatus.PENDING
    assert task.title == "Write release notes"
    assert task.description == "Summarise the sprint"
    assert task.due_date == date(2025, 1, 1)
    assert task.created_by == 2
    assert task.assigned_to == 1
    assert task.team == "Platform"
    assert task.project == "Apollo"


@pytest.mark.asyncio
async def test_create_accepts_iso_due_date_and_blank_labels(db, make_task):
    task = await make_task(due_date="2025-03-04T00:00:00Z", team="  ", project="", assigned_to=None)
    assert task.due_date == date(2025, 3, 4)
    assert task.team is None
    assert task.project is None
    assert task.assigned_to is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"title": None}, "title"),
        ({"title": "   "}, "title"),
        ({"due_date": None}, "due_date"),
        ({"due_date": ""}, "due_date"),
        ({"due_date": "next tuesday"}, "due_date"),
    ],
)
async def test_create_requires_title_and_due_date(db, make_task, overrides, field):
    with pytest.raises(ValidationError) as exc_info:
        await make_task(**overrides)
    assert exc_info.value.details == {"field": field}
    assert await TaskService(db).list_all() == []


@pytest.mark.asyncio
async def test_title_longer_than_column_is_rejected(db, make_task):
    with pytest.raises(ValidationError) as exc_info:
        await make_task(title="x" * (TITLE_MAX_LENGTH + 1))
    assert exc_info.value.details == {"field": "title", "max_length": TITLE_MAX_LENGTH}

    task = await make_task(title="x" * TITLE_MAX_LENGTH)
    with pytest.raises(ValidationError):
        await TaskService(db).update_task(task.id, {"title": "y" * (TITLE_MAX_LENGTH + 1)})
    assert (await TaskService(db).get_task(task.id)).title == "x" * TITLE_MAX_LENGTH


@pytest.mark.asyncio
async def test_get_unknown_task(db):
    with pytest.raises(NotFoundError):
        await TaskService(db).get_task(404)


@pytest.mark.asyncio
async def test_update_changes_only_supplied_fields(db, make_task):
    task = await make_task()
    service = TaskService(db)

    updated = await service.update_task(task.id, {"title": "Release notes v2", "assigned_to": None})

    assert updated.title == "Release notes v2"
    assert updated.assigned_to is None
    assert updated.description == "Summarise the sprint"
    assert updated.team == "Platform"
    assert updated.status is TaskStatus.PENDING


@pytest.mark.asyncio
async def test_update_never_touches_status(db, make_task):
    task = await make_task()
    service = TaskService(db)

    with pytest.raises(ValidationError):
        await service.update_task(task.id, {"title": "Other", "status": "COMPLETED"})

    task = await service.get_task(task.id)
    assert task.status is TaskStatus.PENDING
    assert task.title == "Write release notes"


@pytest.mark.asyncio
async def test_rejected_update_applies_nothing(db, make_task):
    task = await make_task()
    service = TaskService(db)

    with pytest.raises(ValidationError):
        await service.update_task(task.id, {"project": "Hermes", "title": ""})

    task = await service.get_task(task.id)
    assert task.project == "Apollo"
    assert task.title == "Write release notes"


@pytest.mark.asyncio
async def test_update_unknown_task(db):
    with pytest.raises(NotFoundError):
        await TaskService(db).update_task(99, {"title": "x"})


@pytest.mark.asyncio
@pytest.mark.parametrize("start", list(TaskStatus))
@pytest.mark.parametrize("target", list(TaskStatus))
async def test_any_transition_succeeds_and_is_idempotent(db, make_task, start, target):
    task = await make_task()
    service = TaskService(db)
    await service.transition_status(task.id, start)

    await service.transition_status(task.id, target)
    first = (await service.get_task(task.id)).status
    await service.transition_status(task.id, target)
    second = (await service.get_task(task.id)).status

    assert first is target
    assert second is target


@pytest.mark.asyncio
async def test_transition_rejects_unknown_status(db, make_task):
    task = await make_task()
    service = TaskService(db)

    with pytest.raises(InvalidTransitionError):
        await service.transition_status(task.id, "ARCHIVED")
    assert (await service.get_task(task.id)).status is TaskStatus.PENDING


@pytest.mark.asyncio
async def test_transition_unknown_task(db):
    with pytest.raises(NotFoundError):
        await TaskService(db).transition_status(7, "COMPLETED")


@pytest.mark.asyncio
async def test_delete_removes_task_and_second_delete_fails(db, make_task):
    keep = await make_task(title="Keep me")
    gone = await make_task(title="Delete me")
    service = TaskService(db)

    await service.delete_task(gone.id)

    assert [t.id for t in await service.list_all()] == [keep.id]
    with pytest.raises(NotFoundError):
        await service.delete_task(gone.id)


@pytest.mark.asyncio
async def test_delete_cascades_to_subtasks_and_comments(db, make_task):
    task = await make_task()
    other = await make_task(title="Unrelated")
    subtasks = SubtaskService(db)
    comments = CommentService(db)

    subtask = await subtasks.create_subtask(task.id, "Draft", "")
    await comments.add_comment(OwnerKind.TASK, task.id, 2, "on the task")
    await comments.add_comment(OwnerKind.SUBTASK, subtask.id, 1, "on the subtask")
    await comments.add_comment(OwnerKind.TASK, other.id, 2, "somewhere else")

    await TaskService(db).delete_task(task.id)

    with pytest.raises(NotFoundError):
        await subtasks.get_subtask(subtask.id)
    assert await comments.list_by_owner(OwnerKind.TASK, task.id) == []
    assert await comments.list_by_owner(OwnerKind.SUBTASK, subtask.id) == []
    assert len(await comments.list_by_owner(OwnerKind.TASK, other.id)) == 1


@pytest.mark.asyncio
async def test_list_by_assignee(db, make_task):
    first = await make_task(assigned_to=1)
    await make_task(assigned_to=3)
    second = await make_task(assigned_to=1)
    service = TaskService(db)

    assert [t.id for t in await service.list_by_assignee(1)] == [first.id, second.id]
    assert await service.list_by_assignee(42) == []


@pytest.mark.asyncio
async def test_list_all_filters_match_client_side_filtering(db, make_task):
    await make_task(title="Fix login", team="Platform", project="Apollo")
    await make_task(title="Docs", team="Docs", project="Apollo", description="login screenshots")
    await make_task(title="Ship", team="Platform", project="Hermes")
    service = TaskService(db)

    everything = await service.list_all()
    for filters in (TaskFilters(team="Platform"), TaskFilters(project="Apollo", search="LOGIN")):
        filtered = await service.list_all(filters)
        expected = [
            t for t in everything
            if (not filters.team or t.team == filters.team)
            and (not filters.project or t.project == filters.project)
            and (not filters.search or filters.search.lower() in f"{t.title} {t.description} {t.status.value}".lower())
        ]
        assert [t.id for t in filtered] == [t.id for t in expected]


@pytest.mark.asyncio
async def test_status_summary(db, make_task):
    first = await make_task()
    await make_task()
    service = TaskService(db)
    await service.transition_status(first.id, "COMPLETED")

    summary = await service.status_summary()

    assert summary["total"] == 2
    assert summary["by_status"][TaskStatus.COMPLETED] == 1
    assert summary["by_status"][TaskStatus.PENDING] == 1
    assert summary["by_status"][TaskStatus.IN_PROGRESS] == 0
