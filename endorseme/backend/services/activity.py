"""
Activity Log Service.

Best-effort audit trail. Each entry is written in its own short-lived
session so a failed write never affects the caller's transaction, and
no failure ever propagates to the caller.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from endorseme.backend.core.logging import get_logger
from endorseme.backend.models.activity_log import ActivityStatus, EventType
from endorseme.backend.repositories.activity_log import ActivityLogRepository

logger = get_logger(__name__)


class ActivityLogService:
    """
    Writes ActivityLog entries.

    Args:
        session_factory: Callable returning an AsyncSession context manager.
            Defaults to the application session factory, resolved lazily.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession] | None = None) -> None:
        self._session_factory = session_factory
        self._pending: set[asyncio.Task[None]] = set()

    def _factory(self) -> Callable[[], AsyncSession]:
        if self._session_factory is None:
            from endorseme.backend.core.database import get_session_factory

            self._session_factory = get_session_factory()
        return self._session_factory

    async def log_activity(
        self,
        event_type: EventType,
        action: str,
        details: dict[str, Any] | None = None,
        status: ActivityStatus = ActivityStatus.SUCCESS,
        user_id: int | None = None,
    ) -> None:
        """
        Record one audit entry. Never raises.

        Args:
            event_type: API_CALL, ERROR, AUTH or SYSTEM
            action: Short action name, e.g. SEND_COMMAND
            details: JSON-serializable context
            status: SUCCESS or ERROR
            user_id: Telegram id of the acting user, if any
        """
        try:
            async with self._factory()() as session:
                await ActivityLogRepository(session).create(
                    event_type=EventType(event_type).value,
                    action=action,
                    details=details or {},
                    status=ActivityStatus(status).value,
                    user_id=user_id,
                )
                await session.commit()
        except Exception as e:
            logger.error(
                "Failed to log activity",
                extra={
                    "event_type": str(event_type),
                    "action": action,
                    "error": str(e),
                },
            )

    def log_activity_nowait(
        self,
        event_type: EventType,
        action: str,
        details: dict[str, Any] | None = None,
        status: ActivityStatus = ActivityStatus.SUCCESS,
        user_id: int | None = None,
    ) -> asyncio.Task[None]:
        """Schedule log_activity without awaiting it. Must run inside an event loop."""
        task = asyncio.create_task(
            self.log_activity(event_type, action, details, status, user_id)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for scheduled writes to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
