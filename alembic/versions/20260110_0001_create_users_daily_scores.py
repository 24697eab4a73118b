# mypy: ignore-errors
"""
Migration Alembic pour créer les tables users et daily_scores.

`users` stocke le thème natal (JSON) calculé à l'inscription; `daily_scores` met en cache le
résultat quotidien par (user_id, local_date, tz).
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20260110_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Crée les tables users et daily_scores avec leurs index."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.String(length=32), nullable=False),
        sa.Column("birth_utc", sa.String(length=32), nullable=False),
        sa.Column("birth_tz", sa.String(length=64), nullable=False),
        sa.Column("lat", sa.Float(), nullable=False),
        sa.Column("lon", sa.Float(), nullable=False),
        sa.Column("natal_json", sa.JSON(), nullable=False),
    )
    op.create_index("idx_users_created_at", "users", ["created_at"])

    op.create_table(
        "daily_scores",
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("local_date", sa.String(length=10), nullable=False),
        sa.Column("tz", sa.String(length=64), nullable=False),
        sa.Column("anchored_local_noon", sa.String(length=40), nullable=False),
        sa.Column("anchored_utc", sa.String(length=40), nullable=False),
        sa.Column("result_json", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "local_date", "tz"),
    )
    op.create_index("idx_daily_scores_created", "daily_scores", ["created_at"])


def downgrade() -> None:
    """Supprime daily_scores puis users."""
    op.drop_index("idx_daily_scores_created", table_name="daily_scores")
    op.drop_table("daily_scores")
    op.drop_index("idx_users_created_at", table_name="users")
    op.drop_table("users")
