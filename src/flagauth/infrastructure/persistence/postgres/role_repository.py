"""PostgreSQL role repository implementation."""

from collections.abc import Collection

from psycopg import AsyncConnection

from flagauth.domain.entities import Role
from flagauth.infrastructure.persistence.postgres.flag_columns import dump_flags, load_flags

_COLUMNS = "id, name, description, flags, inherit, creator"


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2] or "",
        flags=load_flags(r[3], f"role {r[0]}"),
        inherit=list(r[4] or []),
        creator=r[5],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: str) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_role(r)

    async def list_by_ids(self, role_ids: Collection[str]) -> list[Role]:
        """List roles whose id is in ``role_ids``."""
        if not role_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = ANY(%s)",
            (list(role_ids),),
        )
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def upsert(self, role: Role) -> Role:
        """Insert or update role."""
        await self._conn.execute(
            f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, "
            "description = EXCLUDED.description, flags = EXCLUDED.flags, "
            "inherit = EXCLUDED.inherit, creator = EXCLUDED.creator",
            (
                role.id,
                role.name,
                role.description,
                dump_flags(role.flags),
                list(role.inherit),
                role.creator,
            ),
        )
        return role

    async def delete(self, role_id: str) -> None:
        """Delete role."""
        await self._conn.execute("DELETE FROM role WHERE id = %s", (role_id,))
