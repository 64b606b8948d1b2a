"""Seed catalog entries for the flags guarding the API itself.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO permission (flag, name, description, key, path)
        VALUES
        ('flagauth.permission.check', 'Check permissions',
         'Check the flags of any holder', 'check', 'flagauth.permission'),
        ('flagauth.externalrole.sync', 'Sync external roles',
         'Mirror role events from the external platform', 'sync', 'flagauth.externalrole')
        ON CONFLICT (flag) DO NOTHING
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM permission
        WHERE flag IN ('flagauth.permission.check', 'flagauth.externalrole.sync')
    """)
