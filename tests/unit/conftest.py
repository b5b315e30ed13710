"""
Unit Test Fixtures.

All external dependencies are mocked. Unit tests never touch the database
or the Telegram Bot API.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Mocked AsyncSession."""
    session = AsyncMock()
    session.add = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def mock_activity() -> MagicMock:
    """ActivityLogService double; log_activity is awaitable, log_activity_nowait is not."""
    activity = MagicMock()
    activity.log_activity = AsyncMock()
    activity.log_activity_nowait = MagicMock()
    return activity


@pytest.fixture
def mock_bot() -> AsyncMock:
    """aiogram Bot double whose send_message returns message_id 777."""
    bot = AsyncMock()
    bot.send_message = AsyncMock(return_value=MagicMock(message_id=777))
    return bot
