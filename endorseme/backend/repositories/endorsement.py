"""
Endorsement Repository.

Data access layer for endorsements.
"""

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from endorseme.backend.models.endorsement import Endorsement
from endorseme.backend.repositories.base import BaseRepository


class EndorsementRepository(BaseRepository[Endorsement]):
    """Repository for Endorsement model."""

    model = Endorsement

    async def list_for_username(self, username: str) -> list[Endorsement]:
        """
        Get all endorsements of a user, newest first.

        Args:
            username: Normalized username ('@' prefixed)

        Returns:
            Endorsements with their category loaded, ordered by
            timestamp then id, both descending
        """
        result = await self.session.execute(
            select(Endorsement)
            .options(joinedload(Endorsement.category))
            .where(Endorsement.username == username)
            .order_by(Endorsement.timestamp.desc(), Endorsement.id.desc())
        )
        return list(result.scalars().all())
