"""PostgreSQL permission catalog repository implementation."""

from psycopg import AsyncConnection

from flagauth.domain.entities import Permission
from flagauth.domain.value_objects import Flag


class PostgresPermissionRepository:
    """Permission catalog repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_flag(self, flag: Flag) -> Permission | None:
        """Get catalog entry by flag."""
        cur = await self._conn.execute(
            "SELECT flag, name, description, creator, usage_limit, cooldown_seconds "
            "FROM permission WHERE flag = %s",
            (flag.canonical,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Permission(
            flag=Flag.validate(r[0]),
            name=r[1],
            description=r[2] or "",
            creator=r[3],
            usage_limit=r[4],
            cooldown_seconds=r[5],
        )

    async def upsert(self, permission: Permission) -> Permission:
        """Insert or update catalog entry; key and path are derived from the flag."""
        await self._conn.execute(
            "INSERT INTO permission "
            "(flag, name, description, key, path, creator, usage_limit, cooldown_seconds) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (flag) DO UPDATE SET name = EXCLUDED.name, "
            "description = EXCLUDED.description, usage_limit = EXCLUDED.usage_limit, "
            "cooldown_seconds = EXCLUDED.cooldown_seconds",
            (
                permission.flag.canonical,
                permission.name,
                permission.description,
                permission.key,
                permission.path,
                permission.creator,
                permission.usage_limit,
                permission.cooldown_seconds,
            ),
        )
        return permission

    async def delete(self, flag: Flag) -> None:
        """Delete catalog entry."""
        await self._conn.execute("DELETE FROM permission WHERE flag = %s", (flag.canonical,))
