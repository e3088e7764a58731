"""PostgreSQL async connection pool for the authorization store."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    timeout: float = 5.0,
) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False; PoolLifespanMiddleware opens it on ASGI
    startup. timeout bounds the wait for a free connection, and the resulting
    PoolTimeout surfaces as StorageUnavailable through the unit of work.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
        check=AsyncConnectionPool.check_connection,
    )


async def ping(pool: AsyncConnectionPool) -> None:
    """Round-trip a trivial query. Raises psycopg errors when the store is down."""
    async with pool.connection() as conn:
        await conn.execute("SELECT 1")
