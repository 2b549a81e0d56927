"""Create users and snapshots tables.

Users are keyed by email; snapshots hold the pasted holdings JSON plus the
drift/suggestion outputs the dashboard computed at save time.

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "snapshots",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("stage", sa.Integer(), nullable=False),
        sa.Column("snapshot_json", sa.JSON(), nullable=False),
        sa.Column("drift_result", sa.JSON(), nullable=True),
        sa.Column("suggestions", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    # Latest-per-user and history queries
    op.create_index("idx_snapshots_user_created", "snapshots", ["user_id", "created_at"])


def downgrade() -> None:
    op.drop_index("idx_snapshots_user_created", table_name="snapshots")
    op.drop_table("snapshots")
    op.drop_table("users")
