"""
Activity Log Model.

Append-only audit trail of user and system actions. Writes are best-effort.
"""

import enum
from typing import Any

from sqlalchemy import JSON, BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from endorseme.backend.models.base import Base, CreatedAtMixin, UUIDMixin


class EventType(str, enum.Enum):
    API_CALL = "API_CALL"
    ERROR = "ERROR"
    AUTH = "AUTH"
    SYSTEM = "SYSTEM"


class ActivityStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ActivityLog(UUIDMixin, CreatedAtMixin, Base):
    """Single audit entry."""

    __tablename__ = "activity_logs"

    user_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)

    def __repr__(self) -> str:
        return f"<ActivityLog(event_type={self.event_type}, action={self.action}, status={self.status})>"
