"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from taskhub.models.enums import OwnerKind, TaskStatus
from taskhub.models.task import Task
from taskhub.models.subtask import Subtask
from taskhub.models.comment import Comment

__all__ = [
    "OwnerKind",
    "TaskStatus",
    "Task",
    "Subtask",
    "Comment",
]
