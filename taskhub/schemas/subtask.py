"""
Subtask Pydantic schemas.
"""

from typing import Optional

from taskhub.models.enums import TaskStatus
from taskhub.schemas.base import CamelModel, EntityRead


class SubtaskCreate(CamelModel):
    """Schema for creating a subtask under the task named in the URL."""

    title: Optional[str] = None
    description: str = ""


class SubtaskRead(EntityRead):
    """Schema for reading subtask data (API response)."""

    task_id: int
    title: str
    description: str
    status: TaskStatus
