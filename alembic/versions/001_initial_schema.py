"""Initial schema - users, roles, external roles, permission catalog, invocations.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_TEXT_ARRAY = postgresql.ARRAY(sa.Text())


def upgrade() -> None:
    op.create_table(
        "role",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("name", sa.String(32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("flags", _TEXT_ARRAY, nullable=False, server_default="{}"),
        # Stored only; roles do not inherit from each other.
        sa.Column("inherit", _TEXT_ARRAY, nullable=False, server_default="{}"),
        sa.Column("creator", sa.String(24), nullable=True),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("flags", _TEXT_ARRAY, nullable=False, server_default="{}"),
        sa.Column("roles", _TEXT_ARRAY, nullable=False, server_default="{}"),
        sa.Column("external_id", sa.String(32), nullable=True),
    )
    op.create_index("ix_app_user_external_id", "app_user", ["external_id"], unique=True)

    op.create_table(
        "external_role",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("guild_id", sa.String(32), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("flags", _TEXT_ARRAY, nullable=False, server_default="{}"),
    )

    op.create_table(
        "permission",
        sa.Column("flag", sa.Text(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("key", sa.Text(), nullable=False),
        sa.Column("path", sa.Text(), nullable=False),
        sa.Column("creator", sa.String(24), nullable=True),
        sa.Column("usage_limit", sa.Integer(), nullable=True),
        sa.Column("cooldown_seconds", sa.Integer(), nullable=True),
        sa.CheckConstraint(
            "(usage_limit IS NULL) = (cooldown_seconds IS NULL)",
            name="ck_permission_limit_window",
        ),
    )

    op.create_table(
        "permission_invocation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("subject_id", sa.String(24), nullable=False),
        sa.Column("flag", sa.Text(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_permission_invocation_subject_flag",
        "permission_invocation",
        ["subject_id", "flag"],
    )
    op.create_index(
        "ix_permission_invocation_expires_at",
        "permission_invocation",
        ["expires_at"],
    )


def downgrade() -> None:
    op.drop_table("permission_invocation")
    op.drop_table("permission")
    op.drop_table("external_role")
    op.drop_table("app_user")
    op.drop_table("role")
