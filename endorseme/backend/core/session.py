"""
Session Context.

Explicit per-login session: the resolved Telegram user plus the UI state of
the endorsement workflows. A SessionContext is created on login, handed to
every workflow call, and discarded on logout.

Sessions live in an in-process SessionStore keyed by an opaque id; the id
travels to the browser inside a signed token (see security.py).
"""

import enum
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from endorseme.backend.core.config import get_app_config
from endorseme.backend.core.logging import get_logger
from endorseme.backend.core.utils import utc_now
from endorseme.backend.schemas.auth import TelegramUser
from endorseme.backend.schemas.endorsement import (
    DEFAULT_CATEGORY,
    DEFAULT_TRUST_LEVEL,
    EndorsementHistoryItem,
    WorkflowStateResponse,
)

logger = get_logger(__name__)


class WorkflowPhase(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    QUERYING = "querying"
    NOTIFYING = "notifying"
    DONE = "done"


@dataclass
class WorkflowState:
    """Form inputs and outcome of the last workflow run."""

    telegram_id: str = ""
    category: str = DEFAULT_CATEGORY
    note: str = ""
    trust_level: str = DEFAULT_TRUST_LEVEL
    busy: bool = False
    phase: WorkflowPhase = WorkflowPhase.IDLE
    success: str | None = None
    error: str | None = None
    error_code: str | None = None
    endorsements: list[EndorsementHistoryItem] = field(default_factory=list)

    def clear_status(self) -> None:
        self.success = None
        self.error = None
        self.error_code = None

    def reset_inputs(self) -> None:
        """Clear the form after a successful endorsement. Category is kept."""
        self.telegram_id = ""
        self.note = ""
        self.trust_level = DEFAULT_TRUST_LEVEL

    def to_response(self) -> WorkflowStateResponse:
        return WorkflowStateResponse(
            telegram_id=self.telegram_id,
            category=self.category,
            note=self.note,
            trust_level=self.trust_level,
            busy=self.busy,
            phase=self.phase.value,
            success=self.success,
            error=self.error,
            error_code=self.error_code,
            endorsements=list(self.endorsements),
        )


@dataclass
class SessionContext:
    """
    Identity and workflow state of one client.

    `persistent` is False for contexts built around a WebApp host identity
    on a single request; those are never put in the store.
    `expires_at` is set by the store and matches the session token expiry.
    """

    session_id: str
    user: TelegramUser | None = None
    state: WorkflowState = field(default_factory=WorkflowState)
    persistent: bool = True
    expires_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def clear(self) -> None:
        self.user = None
        self.state = WorkflowState()


class SessionStore:
    """
    In-process session registry.

    Args:
        ttl: Session lifetime. Expired sessions are dropped on lookup and
            pruned whenever a new session is created. None keeps sessions
            until they are discarded.
        clock: Source of the current time
    """

    def __init__(
        self,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._sessions: dict[str, SessionContext] = {}
        self._ttl = ttl
        self._clock = clock

    def create(self, user: TelegramUser | None = None) -> SessionContext:
        now = self._clock()
        self.prune(now)
        session = SessionContext(
            session_id=secrets.token_urlsafe(24),
            user=user,
            expires_at=now + self._ttl if self._ttl is not None else None,
        )
        self._sessions[session.session_id] = session
        logger.debug("Session created", extra={"user_id": user.id if user else None})
        return session

    def get(self, session_id: str) -> SessionContext | None:
        session = self._sessions.get(session_id)
        if session is not None and session.is_expired(self._clock()):
            del self._sessions[session_id]
            return None
        return session

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def prune(self, now: datetime | None = None) -> int:
        """Drop expired sessions. Returns how many were removed."""
        now = now or self._clock()
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug("Expired sessions pruned", extra={"count": len(expired)})
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: Any) -> bool:
        return session_id in self._sessions


def session_ttl() -> timedelta:
    """Session lifetime, equal to the session token lifetime."""
    return timedelta(minutes=get_app_config().security.jwt.access_token_expire_minutes)


_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Process-wide session store."""
    global _store
    if _store is None:
        _store = SessionStore(ttl=session_ttl())
    return _store
