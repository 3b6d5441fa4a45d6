"""Enumerations shared by models, schemas and services."""

import enum


class TaskStatus(str, enum.Enum):
    """Lifecycle status of a task or subtask."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class OwnerKind(str, enum.Enum):
    """Kind of object a comment is attached to."""

    TASK = "TASK"
    SUBTASK = "SUBTASK"
