"""PostgreSQL resource repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from mediagate.domain.entities import Resource
from mediagate.domain.value_objects import ResourceKind

_COLUMNS = "id, kind, slug, title, owner_id, group_id, is_public, created_at, updated_at"


def _row_to_resource(r: tuple) -> Resource:
    return Resource(
        id=r[0],
        kind=ResourceKind(r[1]),
        slug=r[2],
        title=r[3],
        owner_id=r[4],
        group_id=r[5],
        is_public=r[6],
        created_at=r[7],
        updated_at=r[8],
    )


class PostgresResourceRepository:
    """Resource repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, resource_id: UUID) -> Resource | None:
        """Get resource by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource WHERE id = %s",
            (resource_id,),
        )
        r = await cur.fetchone()
        return _row_to_resource(r) if r else None

    async def get_by_slug(self, kind: ResourceKind, slug: str) -> Resource | None:
        """Get resource by kind and slug."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource WHERE kind = %s AND slug = %s",
            (str(kind), slug),
        )
        r = await cur.fetchone()
        return _row_to_resource(r) if r else None

    async def list_by_group(self, group_id: UUID) -> list[Resource]:
        """List resources currently assigned to group, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource WHERE group_id = %s ORDER BY created_at, id",
            (group_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_resource(r) for r in rows]

    async def create(self, resource: Resource) -> Resource:
        """Create resource."""
        await self._conn.execute(
            f"INSERT INTO resource ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                resource.id,
                str(resource.kind),
                resource.slug,
                resource.title,
                resource.owner_id,
                resource.group_id,
                resource.is_public,
                resource.created_at,
                resource.updated_at,
            ),
        )
        return resource

    async def update(self, resource: Resource) -> None:
        """Update mutable resource fields."""
        await self._conn.execute(
            "UPDATE resource SET title=%s, group_id=%s, is_public=%s, updated_at=%s WHERE id=%s",
            (
                resource.title,
                resource.group_id,
                resource.is_public,
                resource.updated_at,
                resource.id,
            ),
        )
