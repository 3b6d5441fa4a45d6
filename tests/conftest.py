"""
Pytest configuration and shared fixtures.

Tests run against an in-memory SQLite database (aiosqlite) built from the
model metadata, and a fake user directory served through httpx.MockTransport.
"""

import os

# Must be set before taskhub.db.session builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import date

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import taskhub.models  # noqa: F401
from taskhub.clients.user_directory import UserDirectoryClient
from taskhub.core.dependencies import get_user_directory
from taskhub.db.base import Base
from taskhub.db.session import get_db
from taskhub.main import app


DIRECTORY_USERS = [
    {"id": 1, "username": "alice", "email": "alice@example.com", "role": {"id": 3, "name": "DEVELOPER"}},
    {"id": 2, "username": "bob", "email": "bob@example.com", "role": {"id": 2, "name": "MANAGER"}},
    {"id": 3, "username": "dana", "email": "dana@example.com", "role": {"id": 3, "name": "DEVELOPER"}},
    {"id": 5, "username": "carol", "email": "carol@example.com", "role": {"id": 1, "name": "ADMINISTRATOR"}},
    {"id": 7, "username": "erin", "email": "erin@example.com", "role": None},
]

MANAGER = {"X-User-Id": "2", "X-User-Role": "MANAGER"}
ADMIN = {"X-User-Id": "5", "X-User-Role": "ADMINISTRATOR"}
ALICE = {"X-User-Id": "1", "X-User-Role": "DEVELOPER"}
DANA = {"X-User-Id": "3", "X-User-Role": "DEVELOPER"}


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no database")


def directory_transport(users=None, status_code=200) -> httpx.MockTransport:
    """Fake user service answering GET /api/users."""
    users = DIRECTORY_USERS if users is None else users

    def handler(request: httpx.Request) -> httpx.Response:
        if status_code != 200:
            return httpx.Response(status_code, json={"message": "boom"})
        if request.url.path == "/api/users":
            return httpx.Response(200, json=users)
        return httpx.Response(404, json={"message": "not found"})

    return httpx.MockTransport(handler)


@pytest.fixture
def headers():
    """Identity headers for the seeded directory users."""
    return {"manager": MANAGER, "admin": ADMIN, "alice": ALICE, "dana": DANA}


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def make_task(db):
    """Create a task through the service with sensible defaults."""
    from taskhub.services.task_service import TaskService

    service = TaskService(db)

    async def _make(**overrides):
        fields = {
            "title": "Write release notes",
            "description": "Summarise the sprint",
            "due_date": date(2025, 1, 1),
            "created_by": 2,
            "assigned_to": 1,
            "team": "Platform",
            "project": "Apollo",
        }
        fields.update(overrides)
        return await service.create_task(**fields)

    return _make


@pytest.fixture
def directory_state():
    """Mutable knobs for the fake user directory used by the API client."""
    return {"users": None, "status_code": 200}


@pytest_asyncio.fixture
async def client(session_maker, directory_state):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_user_directory():
        transport = directory_transport(
            users=directory_state["users"],
            status_code=directory_state["status_code"],
        )
        async with UserDirectoryClient("http://users.test", transport=transport) as directory:
            yield directory

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_user_directory] = override_get_user_directory
    try:
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        ) as http_client:
            yield http_client
    finally:
        app.dependency_overrides.clear()
