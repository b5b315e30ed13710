"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and the real service
stack. Only the Telegram Bot API is replaced by a mock.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from endorseme.backend.core.database import get_db_session
from endorseme.backend.core.dependencies import get_activity_service, get_identity_service
from endorseme.backend.core.session import SessionStore, session_ttl
from endorseme.backend.models import ActivityLog
from endorseme.backend.services.activity import ActivityLogService
from endorseme.backend.services.identity import IdentityService

# Patch target for get_bot (imported inside the send method)
GET_BOT_PATCH = "endorseme.telegram.bot.get_bot"


@pytest.fixture
def activity_service(db_session_factory: async_sessionmaker[AsyncSession]) -> ActivityLogService:
    return ActivityLogService(session_factory=db_session_factory)


@pytest.fixture
def identity_service(activity_service: ActivityLogService) -> IdentityService:
    return IdentityService(activity_service, store=SessionStore(ttl=session_ttl()), webapp_identity_enabled=True)


@pytest.fixture
def bot() -> AsyncMock:
    """Bot API double; send_message returns message_id 777."""
    mock_bot = AsyncMock()
    mock_bot.send_message = AsyncMock(return_value=MagicMock(message_id=777))
    return mock_bot


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session_factory: async_sessionmaker[AsyncSession],
    activity_service: ActivityLogService,
    identity_service: IdentityService,
    bot: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the test database.

    Each request gets its own session from the test session factory, like
    the real get_db_session. Audit entries go to the same database.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    from endorseme.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_activity_service] = lambda: activity_service
    app.dependency_overrides[get_identity_service] = lambda: identity_service

    with patch(GET_BOT_PATCH, return_value=bot):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as test_client:
            yield test_client

    await activity_service.drain()
    app.dependency_overrides.clear()


@pytest.fixture
async def logged_in_client(client: AsyncClient) -> AsyncClient:
    """Client holding a session cookie for @bob (id 42)."""
    response = await client.post(
        "/api/v1/auth/telegram",
        json={"id": 42, "first_name": "Bob", "username": "bob"},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def audit_entries(db_session_factory: async_sessionmaker[AsyncSession]):
    """Async callable returning all stored ActivityLog rows, oldest first."""

    async def _entries() -> list[ActivityLog]:
        async with db_session_factory() as session:
            result = await session.execute(select(ActivityLog).order_by(ActivityLog.created_at))
            return list(result.scalars().all())

    return _entries
