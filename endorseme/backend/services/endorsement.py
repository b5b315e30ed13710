"""
Endorsement Service.

Persistence client for endorsements: category resolution, insert and
history reads, with store failures mapped to the persistence error family.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from endorseme.backend.core.exceptions import (
    CategoryLookupError,
    EndorsementInsertError,
    QueryError,
)
from endorseme.backend.core.utils import normalize_username
from endorseme.backend.models.endorsement import Endorsement
from endorseme.backend.repositories.category import CategoryRepository
from endorseme.backend.repositories.endorsement import EndorsementRepository
from endorseme.backend.services.base import BaseService


class EndorsementService(BaseService):
    """Creates and reads endorsements."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.categories = CategoryRepository(session)
        self.endorsements = EndorsementRepository(session)

    async def create_endorsement(
        self,
        username: str,
        category: str,
        note: str | None,
        endorsed_by: str,
        trust_level: int,
    ) -> Endorsement:
        """
        Insert an endorsement and commit it.

        The category label is matched exactly; nothing is written when it
        does not resolve.

        Args:
            username: Target username, normalized here
            category: Category display name
            note: Optional free text
            endorsed_by: Username of the endorser
            trust_level: 1-4

        Returns:
            The committed endorsement

        Raises:
            CategoryLookupError: Unknown category or lookup failure
            EndorsementInsertError: Insert or commit failure
        """
        username = normalize_username(username)
        self._log_operation(
            "Creating endorsement",
            username=username,
            category=category,
            trust_level=trust_level,
        )

        category_id = await self._execute_db_operation(
            "get_category_id",
            self.categories.get_id_by_name(category),
            error_factory=CategoryLookupError,
        )
        if category_id is None:
            raise CategoryLookupError(f"category {category!r} not found")

        endorsement = await self._execute_db_operation(
            "create_endorsement",
            self.endorsements.create(
                username=username,
                category_id=category_id,
                note=note,
                endorsed_by=endorsed_by,
                trust_level=trust_level,
            ),
            error_factory=EndorsementInsertError,
        )
        await self._execute_db_operation(
            "commit_endorsement",
            self.session.commit(),
            error_factory=EndorsementInsertError,
        )

        self._log_operation("Endorsement created", endorsement_id=endorsement.id)
        return endorsement

    async def get_endorsements(self, username: str) -> list[Endorsement]:
        """
        Endorsements of a user, newest first, with category names.

        An empty list is a normal result.

        Raises:
            QueryError: On store failure
        """
        username = normalize_username(username)
        endorsements = await self._execute_db_operation(
            "get_endorsements",
            self.endorsements.list_for_username(username),
            error_factory=QueryError,
        )
        self._log_debug("Endorsements fetched", username=username, count=len(endorsements))
        return endorsements
