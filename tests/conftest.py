"""Pytest configuration and fixtures."""

import os
from datetime import date
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from availability_engine.api.deps import get_material_locks, get_today
from availability_engine.db.base import Base
from availability_engine.db.session import get_db
from availability_engine.main import app
from availability_engine.services.reservation import MaterialLockRegistry

# Set TEST_DATABASE_URL to run against PostgreSQL instead of a throwaway SQLite file
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

# Fixed "today" for the API, so campaign dates in tests never fall in the past
API_TODAY = date(2026, 2, 1)


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a fresh database for each test."""
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'availability.db'}"
    engine = create_async_engine(url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for setting up and inspecting data."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
def locks() -> MaterialLockRegistry:
    return MaterialLockRegistry()


@pytest.fixture(scope="function")
async def async_client(session_factory, locks) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client. Every request gets its own session, as in production."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: API_TODAY
    app.dependency_overrides[get_material_locks] = lambda: locks

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
