"""Lifespan middleware - opens shared clients on startup, closes on shutdown."""

from typing import Any

from psycopg_pool import AsyncConnectionPool

from flagauth.infrastructure.membership.http_provider import HttpMembershipProvider


class LifespanMiddleware:
    """Middleware that owns the connection pool and membership client lifecycle."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        membership: HttpMembershipProvider | None = None,
    ) -> None:
        self._pool = pool
        self._membership = membership

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool and membership client when ASGI server starts."""
        await self._pool.open()
        if self._membership is not None:
            await self._membership.open()

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close membership client and pool when ASGI server shuts down."""
        if self._membership is not None:
            await self._membership.close()
        await self._pool.close()
