"""Pool lifespan middleware - ties the connection pool to the ASGI lifespan."""

from typing import Any

import structlog
from psycopg_pool import AsyncConnectionPool

logger = structlog.get_logger(__name__)


class PoolLifespanMiddleware:
    """Opens the pool on ASGI startup and drains it on shutdown.

    Startup does not wait for the database: requests arriving while it is
    unreachable are answered as indeterminate rather than refused at boot.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=False)
        logger.info(
            "database_pool_opened",
            min_size=self._pool.min_size,
            max_size=self._pool.max_size,
        )

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("database_pool_closed")
