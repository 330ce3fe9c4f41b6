"""create journal tables

Revision ID: 20261001_create_journal_tables
Revises:
Create Date: 2026-10-01 00:00:00.000000
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261001_create_journal_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("api_token", sa.String(128), nullable=False, unique=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_users_api_token", "users", ["api_token"])

    op.create_table(
        "trades",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("time", sa.Time, nullable=False),
        sa.Column("asset", sa.String(32), nullable=False),
        sa.Column("entry", sa.Numeric(18, 8), nullable=False),
        sa.Column("exit", sa.Numeric(18, 8), nullable=False),
        sa.Column("position_size", sa.Numeric(18, 8), nullable=False),
        sa.Column("pnl", sa.Numeric(18, 8), nullable=True),
        sa.Column("identity_state", sa.String(64), nullable=True),
        sa.Column("embodiment_rating", sa.Integer, nullable=False),
        sa.Column("beliefs_influence", sa.Text, nullable=True),
        sa.Column("nervous_system_state", sa.String(32), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "embodiment_rating BETWEEN 1 AND 10",
            name="ck_trades_embodiment_rating_range",
        ),
        sa.CheckConstraint("entry >= 0", name="ck_trades_entry_non_negative"),
        sa.CheckConstraint("exit >= 0", name="ck_trades_exit_non_negative"),
        sa.CheckConstraint("position_size >= 0", name="ck_trades_position_size_non_negative"),
    )
    op.create_index("ix_trades_user_id", "trades", ["user_id"])
    op.create_index("ix_trades_date", "trades", ["date"])

    op.create_table(
        "daily_rituals",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("embodiment_score", sa.Integer, nullable=True),
        sa.Column("intention", sa.Text, nullable=True),
        sa.Column("reflection", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("user_id", "date", name="uq_daily_rituals_user_date"),
        sa.CheckConstraint(
            "embodiment_score IS NULL OR embodiment_score BETWEEN 0 AND 10",
            name="ck_daily_rituals_embodiment_score_range",
        ),
    )
    op.create_index("ix_daily_rituals_user_id", "daily_rituals", ["user_id"])

    op.create_table(
        "micro_wins",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_micro_wins_user_id", "micro_wins", ["user_id"])


def downgrade():
    op.drop_table("micro_wins")
    op.drop_table("daily_rituals")
    op.drop_table("trades")
    op.drop_table("users")
