"""
Shared pytest fixtures and configuration for all tests.
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from bookshelf.auth.context import AuthContext
from bookshelf.auth.service import AuthService
from bookshelf.config import Settings
from bookshelf.database.connection import Database
from bookshelf.graphql.schema import schema

TEST_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def settings() -> Settings:
    """Settings for an in-memory store and fast bcrypt."""
    return Settings(
        _env_file=None,
        store_uri="sqlite+aiosqlite:///:memory:",
        session_secret=TEST_SECRET,
        password_hash_rounds=4,
        debug=True,
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Provide a freshly created store."""
    db = Database.from_settings(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def auth_service(settings: Settings, database: Database) -> AuthService:
    return AuthService.from_settings(settings, database)


@pytest.fixture
def execute(database: Database, auth_service: AuthService):
    """Run a GraphQL document against the schema with a resolver context."""

    async def _execute(query: str, variables: dict[str, Any] | None = None, auth=None):
        return await schema.execute(
            query,
            variable_values=variables,
            context_value={
                "request": None,
                "database": database,
                "auth_service": auth_service,
                "auth": auth or AuthContext(),
            },
        )

    return _execute


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application wired to an in-memory store with tables created."""
    from bookshelf.api.app import create_app

    application = create_app(settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration from leaking into Settings()."""
    for name in ("PORT", "HOST", "STORE_URI", "SESSION_SECRET", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
