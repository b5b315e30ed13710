"""
Endorsement Model.

An immutable statement that one Telegram user vouches for another in a
category at a trust level.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from endorseme.backend.core.utils import utc_now
from endorseme.backend.models.base import Base
from endorseme.backend.models.category import Category

MIN_TRUST_LEVEL = 1
MAX_TRUST_LEVEL = 4


class Endorsement(Base):
    """
    Endorsement database model.

    `username` is the endorsed user and always carries a single leading '@'.
    `endorsed_by` is the endorser's username as reported by Telegram.
    Rows are only ever inserted.
    """

    __tablename__ = "endorsements"
    __table_args__ = (
        CheckConstraint(
            f"trust_level BETWEEN {MIN_TRUST_LEVEL} AND {MAX_TRUST_LEVEL}",
            name="ck_endorsements_trust_level",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"),
        nullable=False,
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    endorsed_by: Mapped[str] = mapped_column(String(64), nullable=False)
    trust_level: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
        index=True,
    )

    category: Mapped[Category] = relationship(lazy="raise")

    @property
    def category_name(self) -> str | None:
        """Display name of the joined category, when it was loaded."""
        state = self.__dict__.get("category")
        return state.name if state is not None else None

    def __repr__(self) -> str:
        return f"<Endorsement(id={self.id}, username={self.username!r}, trust_level={self.trust_level})>"
