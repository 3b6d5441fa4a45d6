"""
Comment model.

A comment hangs off exactly one task or one subtask, addressed through the
(owner_kind, owner_id) pair. Comments are write-once.
"""

from sqlalchemy import CheckConstraint, Enum, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.models.base_model import TimestampedModel
from taskhub.models.enums import OwnerKind


class Comment(TimestampedModel):
    """
    Comment table.

    owner_id is not a foreign key because it points at one of two tables;
    existence is checked by the comment service when the row is created.
    """

    __tablename__ = "comments"

    owner_kind: Mapped[OwnerKind] = mapped_column(
        Enum(OwnerKind, name="comment_owner_kind", native_enum=False, length=10),
        nullable=False,
    )

    owner_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    author_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("owner_kind IN ('TASK', 'SUBTASK')", name="ck_comments_owner_kind"),
        CheckConstraint("length(text) > 0", name="ck_comments_text_not_empty"),
        Index("ix_comments_owner", "owner_kind", "owner_id"),
    )
