"""HTTP client for the external user directory (the user/auth service).

The task service never writes users. It reads the user list, each user carrying its role, to
build a UserDirectorySnapshot that the assignment resolver labels ids with.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from taskhub.errors import UpstreamUnavailableError
from taskhub.schemas.directory import DirectoryUser
from taskhub.services.resolver import UserDirectorySnapshot

logger = logging.getLogger(__name__)

USERS_PATH = "/api/users"

_users_adapter = TypeAdapter(List[DirectoryUser])


class UserDirectoryClient:
    """Read-only async client for GET /api/users."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> "UserDirectoryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str) -> Any:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("User directory %s returned %s", path, exc.response.status_code)
            raise UpstreamUnavailableError(
                "User directory returned an error",
                {"path": path, "status_code": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("User directory %s unreachable: %s", path, exc)
            raise UpstreamUnavailableError(
                "User directory is unreachable",
                {"path": path},
            ) from exc
        except ValueError as exc:
            # Body was not JSON
            raise UpstreamUnavailableError(
                "User directory sent an unreadable response",
                {"path": path},
            ) from exc

    async def fetch_users(self) -> List[DirectoryUser]:
        """Fetch the flat user list: {id, username, email, role: {id, name}}."""
        data = await self._get_json(USERS_PATH)
        try:
            return _users_adapter.validate_python(data)
        except PydanticValidationError as exc:
            raise UpstreamUnavailableError(
                "User directory sent malformed users",
                {"path": USERS_PATH, "errors": exc.error_count()},
            ) from exc

    async def snapshot(self) -> UserDirectorySnapshot:
        """Fetch the users and freeze them into a snapshot."""
        return UserDirectorySnapshot(await self.fetch_users())
