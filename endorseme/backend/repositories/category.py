"""
Category Repository.

Read-only access to the seeded category table.
"""

from sqlalchemy import select

from endorseme.backend.models.category import Category
from endorseme.backend.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    model = Category

    async def get_id_by_name(self, name: str) -> int | None:
        """Return the id of the category whose name matches exactly, or None."""
        result = await self.session.execute(
            select(Category.id).where(Category.name == name)
        )
        return result.scalar_one_or_none()

    async def list_names(self) -> list[str]:
        """All category names in id order."""
        result = await self.session.execute(select(Category.name).order_by(Category.id))
        return list(result.scalars().all())
