"""
Role-based permission helpers for the task service.

Defines roles, the calling identity, and the checks routers apply before
writing. Identity itself is established by the gateway and arrives with each
request; see core.dependencies.get_actor.
"""

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from taskhub.errors import ForbiddenError

if TYPE_CHECKING:
    from taskhub.models.task import Task


class Roles:
    """Standard roles in the dashboard."""
    ADMINISTRATOR = "ADMINISTRATOR"
    MANAGER = "MANAGER"
    DEVELOPER = "DEVELOPER"

    ALL = [ADMINISTRATOR, MANAGER, DEVELOPER]

    # Roles that may create, edit and delete tasks
    MANAGERS = [ADMINISTRATOR, MANAGER]

    # Older role names still issued by the user service
    ALIASES = {
        "ADMIN": ADMINISTRATOR,
        "HEAD": ADMINISTRATOR,
        "SENIOR_MANAGER": MANAGER,
    }

    @classmethod
    def normalize(cls, name: Optional[str]) -> Optional[str]:
        """Map a role name onto one of ALL, or None if it is not a known role."""
        if not name:
            return None
        key = name.strip().upper().replace(" ", "_").replace("-", "_")
        key = cls.ALIASES.get(key, key)
        return key if key in cls.ALL else None


@dataclass(frozen=True)
class Actor:
    """The user on whose behalf a request runs."""

    user_id: int
    role: str

    @property
    def is_manager(self) -> bool:
        return self.role in Roles.MANAGERS


def check_role_permission(user_role: str, allowed_roles: List[str]) -> bool:
    """
    Check if user's role is in the list of allowed roles.

    Args:
        user_role: The user's current role
        allowed_roles: List of roles that are permitted

    Returns:
        True if user has permission, False otherwise
    """
    if not user_role or not allowed_roles:
        return False
    return user_role in allowed_roles


def check_can_manage_tasks(actor: Actor) -> bool:
    """Check if user can create, edit or delete tasks."""
    return check_role_permission(actor.role, Roles.MANAGERS)


def check_can_work_on_task(actor: Actor, task: "Task") -> bool:
    """Check if user can move a task (or its subtasks) through the lifecycle."""
    return actor.is_manager or (task.assigned_to is not None and task.assigned_to == actor.user_id)


def raise_if_not_roles(actor: Actor, allowed_roles: List[str], action: str = "perform this action") -> None:
    """
    Raise ForbiddenError if user doesn't have one of the allowed roles.

    Args:
        actor: Calling user
        allowed_roles: List of permitted roles
        action: Description of action being blocked
    """
    if not check_role_permission(actor.role, allowed_roles):
        raise ForbiddenError(
            f"Insufficient permissions to {action}. Required: {', '.join(allowed_roles)}"
        )


def raise_if_cannot_work_on_task(actor: Actor, task: "Task", action: str = "update this task") -> None:
    """Raise ForbiddenError unless user is the task's assignee or a manager."""
    if not check_can_work_on_task(actor, task):
        raise ForbiddenError(
            f"Only the assignee or a manager can {action}",
            {"task_id": task.id},
        )
