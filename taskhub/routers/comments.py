"""
Comment router - comments addressed by their owner reference.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.clients.user_directory import UserDirectoryClient
from taskhub.core.dependencies import get_actor, get_db, get_user_directory
from taskhub.core.permissions import Actor
from taskhub.models.enums import OwnerKind
from taskhub.schemas.comment import CommentCreate, CommentRead
from taskhub.services.comment_service import CommentService
from taskhub.services.resolver import resolve_username

router = APIRouter(prefix="/api/comments", tags=["Comments"])


@router.get("", response_model=List[CommentRead])
async def list_comments(
    owner_kind: OwnerKind = Query(..., alias="ownerKind"),
    owner_id: int = Query(..., alias="ownerId"),
    include_authors: bool = Query(default=False, alias="includeAuthors"),
    directory: UserDirectoryClient = Depends(get_user_directory),
    _: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    List comments on one task or subtask, oldest first.

    With includeAuthors=true each comment carries the author's username from
    the user directory ("Unknown" for ids the directory does not know).
    """
    comments = await CommentService(db).list_by_owner(owner_kind, owner_id)
    items = [CommentRead.model_validate(comment) for comment in comments]
    if include_authors and items:
        snapshot = await directory.snapshot()
        for item in items:
            item.author_name = resolve_username(item.author_id, snapshot)
    return items


@router.post("", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def add_comment(
    data: CommentCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Attach a comment to a task or subtask as the calling user."""
    comment = await CommentService(db).add_comment(data.owner_kind, data.owner_id, actor.user_id, data.text)
    await db.commit()
    return comment
