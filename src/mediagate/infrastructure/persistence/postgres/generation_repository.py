"""PostgreSQL revocation generation repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection


class PostgresGenerationRepository:
    """Per-resource generation counters in resource_generation.

    Missing rows read as generation 0. Each bump is one atomic statement in
    the current transaction.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def current(self, resource_id: UUID) -> int:
        """Current generation of resource."""
        cur = await self._conn.execute(
            "SELECT generation FROM resource_generation WHERE resource_id = %s",
            (resource_id,),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def bump(self, resource_id: UUID) -> int:
        """Increment and return the generation of resource."""
        cur = await self._conn.execute(
            "INSERT INTO resource_generation (resource_id, generation) VALUES (%s, 1) "
            "ON CONFLICT (resource_id) DO UPDATE "
            "SET generation = resource_generation.generation + 1 "
            "RETURNING generation",
            (resource_id,),
        )
        r = await cur.fetchone()
        return r[0]

    async def bump_group(self, group_id: UUID) -> int:
        """Increment every resource of group; returns number of resources bumped."""
        cur = await self._conn.execute(
            "INSERT INTO resource_generation (resource_id, generation) "
            "SELECT id, 1 FROM resource WHERE group_id = %s "
            "ON CONFLICT (resource_id) DO UPDATE "
            "SET generation = resource_generation.generation + 1",
            (group_id,),
        )
        return cur.rowcount
