"""
Comment repository - database operations for Comment.
"""

from typing import Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.models.comment import Comment
from taskhub.models.enums import OwnerKind


class CommentRepository:
    """Repository for Comment database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_owner(self, owner_kind: OwnerKind, owner_id: int) -> List[Comment]:
        """List comments on one owner, oldest first."""
        result = await self.db.execute(
            select(Comment)
            .where(
                Comment.owner_kind == owner_kind,
                Comment.owner_id == owner_id,
            )
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(result.scalars().all())

    async def create(self, owner_kind: OwnerKind, owner_id: int, author_id: int, text: str) -> Comment:
        """Create a new comment."""
        comment = Comment(
            owner_kind=owner_kind,
            owner_id=owner_id,
            author_id=author_id,
            text=text,
        )
        self.db.add(comment)
        await self.db.flush()
        await self.db.refresh(comment)
        return comment

    async def delete_for_owners(self, owner_kind: OwnerKind, owner_ids: Iterable[int]) -> int:
        """Delete all comments on the given owners. Returns the number of rows removed."""
        ids = list(owner_ids)
        if not ids:
            return 0
        result = await self.db.execute(
            delete(Comment).where(
                Comment.owner_kind == owner_kind,
                Comment.owner_id.in_(ids),
            )
        )
        await self.db.flush()
        return result.rowcount or 0
