"""compatibility score cache

Revision ID: 20250601_000001
Revises: 
Create Date: 2025-06-01 00:00:00.000000
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20250601_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "compatibility_scores",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("profile1_id", sa.String(length=64), nullable=False),
        sa.Column("profile2_id", sa.String(length=64), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column(
            "breakdown",
            sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql"),
            nullable=True,
        ),
        sa.Column("computed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("profile1_id", "profile2_id", name="uq_compatibility_pair"),
        sa.CheckConstraint("profile1_id < profile2_id", name="ck_compatibility_pair_order"),
        sa.CheckConstraint("score >= 0 AND score <= 100", name="ck_compatibility_score_range"),
    )
    op.create_index("ix_compatibility_scores_profile1_id", "compatibility_scores", ["profile1_id"], unique=False)
    op.create_index("ix_compatibility_scores_profile2_id", "compatibility_scores", ["profile2_id"], unique=False)
    op.create_index("ix_compatibility_scores_computed_at", "compatibility_scores", ["computed_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_compatibility_scores_computed_at", table_name="compatibility_scores")
    op.drop_index("ix_compatibility_scores_profile2_id", table_name="compatibility_scores")
    op.drop_index("ix_compatibility_scores_profile1_id", table_name="compatibility_scores")
    op.drop_table("compatibility_scores")
