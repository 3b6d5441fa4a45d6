"""
Task model.

A unit of work created by a manager and tracked through its status lifecycle.
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.models.base_model import TITLE_MAX_LENGTH, TimestampedModel
from taskhub.models.enums import TaskStatus


class Task(TimestampedModel):
    """
    Task table.

    created_by and assigned_to are user ids from the external user directory;
    they are weak references and are never joined against a local table.
    """

    __tablename__ = "tasks"

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
        index=True,
    )

    created_by: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    assigned_to: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        index=True,
    )

    due_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    # Free-text grouping labels used by the dashboard filters
    team: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    project: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} status={self.status}>"
