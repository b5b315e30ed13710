"""
Category Model.

The fixed set of endorsement categories. Rows are seeded by the initial
migration and never written by the application.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from endorseme.backend.models.base import Base


class Category(Base):
    """Endorsement category, looked up by its exact display name."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
