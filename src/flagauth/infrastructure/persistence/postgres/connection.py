"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    name: str = "flagauth",
) -> AsyncConnectionPool:
    """Create the store's connection pool, unopened.

    The API opens it on ASGI startup (LifespanMiddleware); scripts open and
    close it themselves.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        name=name,
        open=False,
    )
