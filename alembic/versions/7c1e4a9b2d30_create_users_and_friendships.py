"""create users and friendships

Revision ID: 7c1e4a9b2d30
Revises:
Create Date: 2026-10-16 10:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c1e4a9b2d30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("display_name", sa.String(length=120), nullable=False),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "friendships",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_one_id", sa.Uuid(), nullable=False),
        sa.Column("user_two_id", sa.Uuid(), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_one_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["user_two_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_friendships_user_one_id", "friendships", ["user_one_id"], unique=False)
    op.create_index("ix_friendships_user_two_id", "friendships", ["user_two_id"], unique=False)
    op.create_index("ix_friendships_date_created", "friendships", ["date_created"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_friendships_date_created", table_name="friendships")
    op.drop_index("ix_friendships_user_two_id", table_name="friendships")
    op.drop_index("ix_friendships_user_one_id", table_name="friendships")
    op.drop_table("friendships")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
