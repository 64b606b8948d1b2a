"""PostgreSQL user repository implementation."""

from psycopg import AsyncConnection

from flagauth.domain.entities import User
from flagauth.infrastructure.persistence.postgres.flag_columns import dump_flags, load_flags

_COLUMNS = "id, name, avatar, flags, roles, external_id"


def _row_to_user(r: tuple) -> User:
    return User(
        id=r[0],
        name=r[1],
        avatar=r[2],
        flags=load_flags(r[3], f"user {r[0]}"),
        roles=list(r[4] or []),
        external_id=r[5],
    )


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_user(r)

    async def get_by_external_id(self, external_id: str) -> User | None:
        """Get the user linked to an external identity."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE external_id = %s",
            (external_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_user(r)

    async def upsert(self, user: User) -> User:
        """Insert or update user."""
        await self._conn.execute(
            f"INSERT INTO app_user ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, avatar = EXCLUDED.avatar, "
            "flags = EXCLUDED.flags, roles = EXCLUDED.roles, external_id = EXCLUDED.external_id",
            (
                user.id,
                user.name,
                user.avatar,
                dump_flags(user.flags),
                list(user.roles),
                user.external_id,
            ),
        )
        return user

    async def delete(self, user_id: str) -> None:
        """Delete user."""
        await self._conn.execute("DELETE FROM app_user WHERE id = %s", (user_id,))
