"""
Comment business logic service.
"""

import logging
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.errors import NotFoundError, ValidationError
from taskhub.models.comment import Comment
from taskhub.models.enums import OwnerKind
from taskhub.repositories.comment_repository import CommentRepository
from taskhub.repositories.subtask_repository import SubtaskRepository
from taskhub.repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def _owner_kind(value: Union[OwnerKind, str]) -> OwnerKind:
    try:
        return OwnerKind(str(value.value if isinstance(value, OwnerKind) else value).strip().upper())
    except ValueError:
        raise ValidationError(
            f"'{value}' is not a comment owner kind",
            {"allowed": [kind.value for kind in OwnerKind]},
        ) from None


class CommentService:
    """Service for comment business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = CommentRepository(db)
        self.tasks = TaskRepository(db)
        self.subtasks = SubtaskRepository(db)

    async def _require_owner(self, owner_kind: OwnerKind, owner_id: int) -> None:
        if owner_kind is OwnerKind.TASK:
            owner = await self.tasks.get_by_id(owner_id)
        else:
            owner = await self.subtasks.get_by_id(owner_id)
        if owner is None:
            raise NotFoundError(
                f"{owner_kind.value.capitalize()} {owner_id} not found",
                {"owner_kind": owner_kind.value, "owner_id": owner_id},
            )

    async def add_comment(
        self,
        owner_kind: Union[OwnerKind, str],
        owner_id: int,
        author_id: int,
        text: Optional[str],
    ) -> Comment:
        """Attach a comment to a task or subtask."""
        kind = _owner_kind(owner_kind)
        if text is None or not text.strip():
            raise ValidationError("Comment text is required", {"field": "text"})
        await self._require_owner(kind, owner_id)

        comment = await self.repository.create(kind, owner_id, author_id, text.strip())
        logger.info("Comment %s added to %s %s by user %s", comment.id, kind.value, owner_id, author_id)
        return comment

    async def list_by_owner(self, owner_kind: Union[OwnerKind, str], owner_id: int) -> List[Comment]:
        """List comments on one task or subtask, oldest first."""
        return await self.repository.list_by_owner(_owner_kind(owner_kind), owner_id)
