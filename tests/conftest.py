"""
pytest configuration and fixtures for the User API test suite
The app is exercised in-process over httpx's ASGI transport with an in-memory repository.
"""

import pytest
import pytest_asyncio
import httpx
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

from userapi.app import app
from userapi.services.user_repository import (
    InMemoryUserRepository,
    PostgresUserRepository,
    get_user_repository,
)


class FakeConnection:
    """Stands in for an asyncpg connection"""

    def __init__(self):
        self.fetch = AsyncMock(return_value=[])
        self.fetchrow = AsyncMock(return_value=None)
        self.fetchval = AsyncMock(return_value=1)
        self.execute = AsyncMock(return_value="DELETE 0")

    @asynccontextmanager
    async def transaction(self):
        yield


class FakePool:
    """Stands in for an asyncpg pool handing out a single connection"""

    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self.close = AsyncMock()

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


@pytest.fixture
def repository():
    """Fresh in-memory repository per test"""
    return InMemoryUserRepository()


@pytest.fixture
def conn():
    return FakeConnection()


@pytest.fixture
def pg_repository(conn):
    """PostgreSQL repository over a fake pool"""
    return PostgresUserRepository(FakePool(conn))


@pytest.fixture
def override_repository():
    """Install a repository for the API routes and undo it afterwards"""
    def _install(repo):
        app.dependency_overrides[get_user_repository] = lambda: repo
    yield _install
    app.dependency_overrides.pop(get_user_repository, None)


@pytest_asyncio.fixture
async def client(repository, override_repository):
    """HTTP client bound to the app with the in-memory repository"""
    override_repository(repository)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


async def create_user(client, name: str, email: str) -> dict:
    """POST a user and return the created record"""
    response = await client.post("/api/v1/users", json={"name": name, "email": email})
    assert response.status_code == 201, response.text
    return response.json()["data"]
