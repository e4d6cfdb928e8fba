"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures and configuration for all tests.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

# Set testing environment before the application modules are imported
os.environ["TESTING"] = "true"

# Add the project root directory to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.dependencies import get_now, get_rate_limiter
from storyvote.main import app
from storyvote.models import Base
from storyvote.utils.config import Settings, get_settings
from storyvote.utils.database import get_engine, get_session_local
from storyvote.utils.request_utils import RateLimiter

ADMIN_KEY = "test-admin-key"

# 09:30 UTC falls inside the first slot of the day
FIXED_NOW = datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)
SESSION_DATE = "2025-01-15"


class FrozenClock:
    """Mutable stand-in for the get_now dependency."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def test_settings() -> Settings:
    """Settings used by the API tests."""
    return Settings(
        ENVIRONMENT="testing",
        ADMIN_API_KEY=ADMIN_KEY,
        IP_SALT="test-salt",
        SESSION_TIMEZONE="UTC",
        ENFORCE_SESSION_WINDOW=True,
        RATE_LIMIT_ENABLED=True,
        SEED_DEMO_DATA=False,
    )


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def rate_limiter() -> RateLimiter:
    limiter = RateLimiter(max_requests=1, window_seconds=24 * 60 * 60)
    yield limiter
    limiter.reset()


@pytest.fixture
def client(test_settings, clock, rate_limiter) -> TestClient:
    """
    Test client against a fresh in-memory database.

    Entering the client runs the startup hook, which creates the tables;
    leaving it disposes the engine, which drops the in-memory database.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_now] = clock
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter

    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Admin-Key": ADMIN_KEY}


@pytest_asyncio.fixture
async def engine():
    """Create a test database engine with all tables."""
    engine = get_engine("sqlite+aiosqlite://")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncSession:
    """Create a fresh database session for a test."""
    session_factory = get_session_local(engine)
    async with session_factory() as session:
        yield session
