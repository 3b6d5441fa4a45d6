"""
FastAPI dependencies shared by the routers.
"""

from typing import AsyncGenerator, Optional

from fastapi import Header

from taskhub.clients.user_directory import UserDirectoryClient
from taskhub.core.config import settings
from taskhub.core.permissions import Actor, Roles
from taskhub.db.session import get_db
from taskhub.errors import UnauthenticatedError

__all__ = ["get_actor", "get_db", "get_user_directory"]


async def get_actor(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Actor:
    """
    Identity of the caller, as forwarded by the gateway.

    The gateway verifies the session token and sets X-User-Id and X-User-Role.
    """
    if not x_user_id or not x_user_id.strip().isdigit():
        raise UnauthenticatedError("Missing or invalid X-User-Id header")

    role = Roles.normalize(x_user_role)
    if role is None:
        raise UnauthenticatedError(
            "Missing or unknown X-User-Role header",
            {"allowed": Roles.ALL},
        )

    return Actor(user_id=int(x_user_id), role=role)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def get_user_directory(
    authorization: Optional[str] = Header(default=None),
) -> AsyncGenerator[UserDirectoryClient, None]:
    """User directory client for one request, forwarding the caller's token."""
    async with UserDirectoryClient(
        settings.USER_SERVICE_URL,
        timeout=settings.USER_SERVICE_TIMEOUT,
        token=_bearer_token(authorization),
    ) as client:
        yield client
