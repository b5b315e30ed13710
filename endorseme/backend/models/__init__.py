# SQLAlchemy models package; importing it registers every table on Base.metadata
from endorseme.backend.models.activity_log import ActivityLog, ActivityStatus, EventType
from endorseme.backend.models.base import Base
from endorseme.backend.models.category import Category
from endorseme.backend.models.endorsement import Endorsement

__all__ = [
    "ActivityLog",
    "ActivityStatus",
    "Base",
    "Category",
    "Endorsement",
    "EventType",
]
