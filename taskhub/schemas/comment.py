"""
Comment Pydantic schemas.

Besides the canonical {ownerKind, ownerId, text} shape, the create schema
accepts the older dashboard shapes {taskId, ...} and {subtaskId, ...}, and
content/comment/commentText as names for the text.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field, model_validator

from taskhub.models.enums import OwnerKind
from taskhub.schemas.base import CamelModel

TEXT_ALIASES = AliasChoices("text", "content", "comment", "commentText", "comment_text")


class CommentBody(CamelModel):
    """Comment text posted to a task- or subtask-scoped endpoint."""

    text: str = Field(default="", validation_alias=TEXT_ALIASES)


class CommentCreate(CommentBody):
    """Schema for creating a comment on any owner."""

    owner_kind: OwnerKind
    owner_id: int

    @model_validator(mode="before")
    @classmethod
    def owner_from_legacy_keys(cls, data):
        if not isinstance(data, dict):
            return data
        if "ownerKind" in data or "owner_kind" in data:
            return data

        task_id = data.get("taskId", data.get("task_id"))
        subtask_id = data.get("subtaskId", data.get("subtask_id"))
        if task_id is not None and subtask_id is not None:
            raise ValueError("A comment attaches to a task or a subtask, not both")
        if task_id is not None:
            return {**data, "owner_kind": OwnerKind.TASK, "owner_id": task_id}
        if subtask_id is not None:
            return {**data, "owner_kind": OwnerKind.SUBTASK, "owner_id": subtask_id}
        return data


class CommentRead(CamelModel):
    """Schema for reading comment data (API response)."""

    id: int
    owner_kind: OwnerKind
    owner_id: int
    author_id: int
    text: str
    created_at: datetime
    author_name: Optional[str] = None
