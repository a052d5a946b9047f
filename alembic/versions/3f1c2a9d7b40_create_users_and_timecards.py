"""create users and timecards

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-18 09:12:44.201733

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)

    op.create_table(
        "timecards",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("week_start_date", sa.DateTime(), nullable=False),
        sa.Column("entries", sa.JSON(), nullable=False),
        sa.Column("total_hours", sa.Float(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
    )
    op.create_index("ix_timecards_id", "timecards", ["id"], unique=False)
    op.create_index("ix_timecards_owner_id", "timecards", ["owner_id"], unique=False)
    op.create_index("ix_timecards_week_start_date", "timecards", ["week_start_date"], unique=False)
    # No unique (owner_id, week_start_date): duplicate weeks are allowed.
    op.create_index(
        "ix_timecards_owner_id_week_start_date",
        "timecards",
        ["owner_id", "week_start_date"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_timecards_owner_id_week_start_date", table_name="timecards")
    op.drop_index("ix_timecards_week_start_date", table_name="timecards")
    op.drop_index("ix_timecards_owner_id", table_name="timecards")
    op.drop_index("ix_timecards_id", table_name="timecards")
    op.drop_table("timecards")

    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
