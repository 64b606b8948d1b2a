"""PostgreSQL cooldown invocation repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection

from flagauth.domain.entities import CooldownInvocation
from flagauth.domain.value_objects import Flag


class PostgresInvocationRepository:
    """Invocation repository implementation.

    PostgreSQL has no TTL, so active rows are selected by ``expires_at`` and
    lapsed rows are removed by ``delete_expired``.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_active(
        self, subject_id: str, flag: Flag, now: datetime
    ) -> list[CooldownInvocation]:
        """List unexpired invocations for subject and flag."""
        cur = await self._conn.execute(
            "SELECT id, subject_id, flag, expires_at FROM permission_invocation "
            "WHERE subject_id = %s AND flag = %s AND expires_at > %s",
            (subject_id, flag.canonical, now),
        )
        rows = await cur.fetchall()
        return [
            CooldownInvocation(
                id=r[0],
                subject_id=r[1],
                flag=Flag.validate(r[2]),
                expires_at=r[3],
            )
            for r in rows
        ]

    async def create(self, invocation: CooldownInvocation) -> CooldownInvocation:
        """Append invocation."""
        await self._conn.execute(
            "INSERT INTO permission_invocation (id, subject_id, flag, expires_at) "
            "VALUES (%s, %s, %s, %s)",
            (
                invocation.id,
                invocation.subject_id,
                invocation.flag.canonical,
                invocation.expires_at,
            ),
        )
        return invocation

    async def delete_expired(self, now: datetime) -> int:
        """Delete lapsed invocations, returning the number removed."""
        cur = await self._conn.execute(
            "DELETE FROM permission_invocation WHERE expires_at <= %s",
            (now,),
        )
        return cur.rowcount
