"""
Assignment resolver.

Turns user ids stored on tasks and comments into display labels, using a
snapshot of the user directory fetched by the caller. Labels are computed at
read time and never stored.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from taskhub.schemas.directory import DirectoryUser

UNASSIGNED_LABEL = "Unassigned"
UNKNOWN_LABEL = "Unknown"
NO_ROLE_LABEL = "No Role"


class UserDirectorySnapshot:
    """Read-only view of the user directory at one point in time."""

    def __init__(self, users: Iterable[DirectoryUser] = ()):
        self._users: Dict[int, DirectoryUser] = {user.id: user for user in users}

    @classmethod
    def from_users(cls, users: Iterable[DirectoryUser | dict]) -> "UserDirectorySnapshot":
        """Build a snapshot from user records or raw user dicts."""
        return cls(
            user if isinstance(user, DirectoryUser) else DirectoryUser.model_validate(user)
            for user in users
        )

    def get(self, user_id: Optional[int]) -> Optional[DirectoryUser]:
        if user_id is None:
            return None
        return self._users.get(user_id)

    def role_of(self, user_id: Optional[int]) -> Optional[str]:
        user = self.get(user_id)
        return user.role_name if user else None

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)


def resolve_label(user_id: Optional[int], snapshot: UserDirectorySnapshot) -> str:
    """
    Label a user reference as "username (ROLE)".

    "Unassigned" means there is no reference at all; "Unknown" means there is
    one but the directory does not know it (a stale or bad id). The two must
    stay distinct.
    """
    if user_id is None:
        return UNASSIGNED_LABEL
    user = snapshot.get(user_id)
    if user is None:
        return UNKNOWN_LABEL
    return f"{user.username} ({user.role_name or NO_ROLE_LABEL})"


def resolve_username(user_id: Optional[int], snapshot: UserDirectorySnapshot) -> str:
    """Comment author display name: the username, or "Unknown"."""
    user = snapshot.get(user_id)
    return user.username if user else UNKNOWN_LABEL
