"""
Schemas for records served by the external user directory.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class DirectoryRole(BaseModel):
    """A role as listed by the user service."""

    id: int
    name: str

    model_config = ConfigDict(extra="ignore")


class DirectoryUser(BaseModel):
    """A user as listed by the user service. The role may be missing."""

    id: int
    username: str
    email: Optional[str] = None
    role: Optional[DirectoryRole] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def role_name(self) -> Optional[str]:
        return self.role.name if self.role else None
