"""
Task Pydantic schemas.
"""

from datetime import date
from typing import Dict, Optional

from pydantic import Field, field_validator

from taskhub.models.enums import TaskStatus
from taskhub.schemas.base import CamelModel, EntityRead


class TaskCreate(CamelModel):
    """
    Schema for creating a task.

    title and due_date are checked by the task service so that a missing value
    is reported the same way whether it comes over HTTP or from code. Any
    status in the payload is ignored: new tasks always start PENDING.
    """

    title: Optional[str] = None
    description: str = ""
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None
    team: Optional[str] = Field(default=None, max_length=100)
    project: Optional[str] = Field(default=None, max_length=100)

    @field_validator("due_date", "assigned_to", mode="before")
    @classmethod
    def empty_as_missing(cls, value):
        # The dashboard form sends "" for an empty date and 0 for "no assignee"
        if value == 0 or value == "":
            return None
        return value


class TaskUpdate(CamelModel):
    """Schema for updating a task. Status is changed through its own endpoint."""

    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None
    team: Optional[str] = Field(default=None, max_length=100)
    project: Optional[str] = Field(default=None, max_length=100)

    @field_validator("assigned_to", mode="before")
    @classmethod
    def zero_is_unassigned(cls, value):
        return None if value == 0 else value


class StatusChange(CamelModel):
    """Body form of a status transition request."""

    status: str


class TaskRead(EntityRead):
    """Schema for reading task data (API response)."""

    title: str
    description: str
    status: TaskStatus
    created_by: int
    assigned_to: Optional[int] = None
    due_date: date
    team: Optional[str] = None
    project: Optional[str] = None


class TaskBoardItem(TaskRead):
    """Task with display labels resolved against the user directory at read time."""

    assignee_label: str
    creator_label: str


class TaskStatusSummary(CamelModel):
    """Task counts per status for a (filtered) task list."""

    total: int
    by_status: Dict[TaskStatus, int]
