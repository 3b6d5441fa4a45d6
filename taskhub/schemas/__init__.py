"""
Schemas package.

Pydantic models for request and response payloads.
"""

from taskhub.schemas.comment import CommentBody, CommentCreate, CommentRead
from taskhub.schemas.directory import DirectoryRole, DirectoryUser
from taskhub.schemas.subtask import SubtaskCreate, SubtaskRead
from taskhub.schemas.task import (
    StatusChange,
    TaskBoardItem,
    TaskCreate,
    TaskRead,
    TaskStatusSummary,
    TaskUpdate,
)

__all__ = [
    "CommentBody",
    "CommentCreate",
    "CommentRead",
    "DirectoryRole",
    "DirectoryUser",
    "StatusChange",
    "SubtaskCreate",
    "SubtaskRead",
    "TaskBoardItem",
    "TaskCreate",
    "TaskRead",
    "TaskStatusSummary",
    "TaskUpdate",
]
