"""
Task list filtering and summaries.

Filtering is always applied in Python to the full task list, so a filtered
listing is exactly the unfiltered listing passed through task_matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from taskhub.core.permissions import Roles
from taskhub.errors import ValidationError
from taskhub.models.enums import TaskStatus
from taskhub.models.task import Task
from taskhub.services.resolver import UserDirectorySnapshot, resolve_label


@dataclass(frozen=True)
class TaskFilters:
    """
    Optional task list filters. Empty strings mean "no filter".

    role keeps tasks whose creator or assignee holds that role and needs a
    user directory snapshot.
    """

    team: Optional[str] = None
    project: Optional[str] = None
    search: Optional[str] = None
    role: Optional[str] = None

    @property
    def needs_directory(self) -> bool:
        return bool(self.role)


def search_text(task: Task, assignee_label: Optional[str] = None) -> str:
    """Lower-cased text a search is matched against, fields joined by spaces."""
    parts = [task.title, task.description or "", TaskStatus(task.status).value]
    if assignee_label:
        parts.append(assignee_label)
    return " ".join(parts).lower()


def task_matches(
    task: Task,
    filters: TaskFilters,
    directory: Optional[UserDirectorySnapshot] = None,
    assignee_label: Optional[str] = None,
) -> bool:
    """
    Whether a task passes the filters.

    assignee_label, when given, is searched along with the task's own text.
    """
    if filters.team and task.team != filters.team:
        return False
    if filters.project and task.project != filters.project:
        return False

    if filters.search:
        needle = filters.search.strip().lower()
        if needle and needle not in search_text(task, assignee_label):
            return False

    if filters.role:
        if directory is None:
            raise ValidationError("Filtering by role needs the user directory")
        role = Roles.normalize(filters.role)
        roles = {
            Roles.normalize(directory.role_of(task.created_by)),
            Roles.normalize(directory.role_of(task.assigned_to)),
        }
        if role is None or role not in roles:
            return False

    return True


def apply_filters(
    tasks: Iterable[Task],
    filters: Optional[TaskFilters] = None,
    directory: Optional[UserDirectorySnapshot] = None,
    search_assignees: bool = False,
) -> List[Task]:
    """
    Return the tasks that match filters, keeping their order.

    With search_assignees and a directory, search also matches the resolved
    assignee label ("alice (DEVELOPER)", "Unassigned").
    """
    if filters is None:
        return list(tasks)
    if not (search_assignees and directory is not None):
        return [task for task in tasks if task_matches(task, filters, directory)]
    return [
        task
        for task in tasks
        if task_matches(task, filters, directory, resolve_label(task.assigned_to, directory))
    ]


def summarize_statuses(tasks: Iterable[Task]) -> Dict[str, object]:
    """Count tasks per status; every status is present, zero when unused."""
    counts = {status: 0 for status in TaskStatus}
    total = 0
    for task in tasks:
        counts[TaskStatus(task.status)] += 1
        total += 1
    return {"total": total, "by_status": counts}
