"""Initial schema: categories, endorsements, activity_logs

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CATEGORIES = (
    "Money exchange",
    "Goods exchange",
    "Services",
    "Professional skills",
    "Personal character",
    "Community contribution",
)


def upgrade() -> None:
    categories = op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )

    op.create_table(
        "endorsements",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("endorsed_by", sa.String(length=64), nullable=False),
        sa.Column("trust_level", sa.SmallInteger(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "trust_level BETWEEN 1 AND 4",
            name="ck_endorsements_trust_level",
        ),
    )
    op.create_index("ix_endorsements_username", "endorsements", ["username"])
    op.create_index("ix_endorsements_timestamp", "endorsements", ["timestamp"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_activity_logs_user_id", "activity_logs", ["user_id"])

    op.bulk_insert(categories, [{"name": name} for name in CATEGORIES])


def downgrade() -> None:
    op.drop_index("ix_activity_logs_user_id", table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_index("ix_endorsements_timestamp", table_name="endorsements")
    op.drop_index("ix_endorsements_username", table_name="endorsements")
    op.drop_table("endorsements")
    op.drop_table("categories")
