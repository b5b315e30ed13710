"""
Activity Log Repository.
"""

from endorseme.backend.models.activity_log import ActivityLog
from endorseme.backend.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """Repository for ActivityLog model. Inserts only."""

    model = ActivityLog
