"""
Subtask model.

Represents a step of a parent task, owned by the parent task's assignee.
"""

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.models.base_model import TITLE_MAX_LENGTH, TimestampedModel
from taskhub.models.enums import TaskStatus


class Subtask(TimestampedModel):
    """
    Subtask table - scoped to exactly one parent task.

    task_id is fixed at creation; a subtask is never moved to another task.
    """

    __tablename__ = "subtasks"

    task_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, name="task_status", native_enum=False, length=20),
        nullable=False,
        default=TaskStatus.PENDING,
    )
