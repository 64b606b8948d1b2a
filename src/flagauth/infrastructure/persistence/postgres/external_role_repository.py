"""PostgreSQL external role repository implementation."""

from collections.abc import Collection

from psycopg import AsyncConnection

from flagauth.domain.entities import ExternalRole
from flagauth.infrastructure.persistence.postgres.flag_columns import dump_flags, load_flags

_COLUMNS = "id, name, guild_id, deleted, flags"


def _row_to_external_role(r: tuple) -> ExternalRole:
    return ExternalRole(
        id=r[0],
        name=r[1],
        guild_id=r[2],
        deleted=r[3],
        flags=load_flags(r[4], f"external role {r[0]}"),
    )


class PostgresExternalRoleRepository:
    """External role repository implementation. Soft-deleted rows are returned."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: str) -> ExternalRole | None:
        """Get external role by platform id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM external_role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_external_role(r)

    async def list_by_ids(self, role_ids: Collection[str]) -> list[ExternalRole]:
        """List external roles whose id is in ``role_ids``."""
        if not role_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM external_role WHERE id = ANY(%s)",
            (list(role_ids),),
        )
        rows = await cur.fetchall()
        return [_row_to_external_role(r) for r in rows]

    async def upsert(self, role: ExternalRole) -> ExternalRole:
        """Insert or update external role."""
        await self._conn.execute(
            f"INSERT INTO external_role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, "
            "guild_id = EXCLUDED.guild_id, deleted = EXCLUDED.deleted, flags = EXCLUDED.flags",
            (role.id, role.name, role.guild_id, role.deleted, dump_flags(role.flags)),
        )
        return role

    async def delete(self, role_id: str) -> None:
        """Purge external role."""
        await self._conn.execute("DELETE FROM external_role WHERE id = %s", (role_id,))
