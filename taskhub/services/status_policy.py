"""
Status lifecycle policy for tasks and subtasks.

Every status change goes through check_transition. Transitions are
unconstrained today: any status may follow any other. To enforce an ordering,
narrow ALLOWED_TRANSITIONS, e.g.
``TaskStatus.PENDING: frozenset({TaskStatus.PENDING, TaskStatus.IN_PROGRESS})``.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Union

from taskhub.errors import InvalidTransitionError
from taskhub.models.enums import TaskStatus

ALLOWED_TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    status: frozenset(TaskStatus) for status in TaskStatus
}

_SEPARATORS = re.compile(r"[\s\-]+")


def parse_status(value: Union[TaskStatus, str, None]) -> TaskStatus:
    """
    Read a status value from user input.

    Case-insensitive; spaces and hyphens count as underscores, so the
    dashboard's "In Progress" and the API's "IN_PROGRESS" are the same status.
    """
    if isinstance(value, TaskStatus):
        return value
    if value is None or not str(value).strip():
        raise InvalidTransitionError(
            "A status is required",
            {"allowed": [s.value for s in TaskStatus]},
        )

    normalized = _SEPARATORS.sub("_", str(value).strip()).upper()
    try:
        return TaskStatus(normalized)
    except ValueError:
        raise InvalidTransitionError(
            f"'{value}' is not a valid status",
            {"allowed": [s.value for s in TaskStatus]},
        ) from None


def check_transition(current: Union[TaskStatus, str], target: Union[TaskStatus, str, None]) -> TaskStatus:
    """Return the parsed target status if moving from current to it is allowed."""
    source = TaskStatus(current)
    new_status = parse_status(target)
    if new_status not in ALLOWED_TRANSITIONS[source]:
        raise InvalidTransitionError(
            f"Cannot move from {source.value} to {new_status.value}",
            {"from": source.value, "to": new_status.value},
        )
    return new_status
