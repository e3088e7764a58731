"""PostgreSQL access group and membership repository implementations."""

from uuid import UUID

from psycopg import AsyncConnection

from mediagate.domain.entities import AccessGroup, GroupMembership
from mediagate.domain.value_objects import Role


class PostgresGroupRepository:
    """Access group repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, group_id: UUID) -> AccessGroup | None:
        """Get group by id."""
        cur = await self._conn.execute(
            "SELECT id, name, slug, owner_id, created_at FROM access_group WHERE id = %s",
            (group_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return AccessGroup(id=r[0], name=r[1], slug=r[2], owner_id=r[3], created_at=r[4])

    async def get_by_slug(self, slug: str) -> AccessGroup | None:
        """Get group by slug."""
        cur = await self._conn.execute(
            "SELECT id, name, slug, owner_id, created_at FROM access_group WHERE slug = %s",
            (slug,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return AccessGroup(id=r[0], name=r[1], slug=r[2], owner_id=r[3], created_at=r[4])

    async def create(self, group: AccessGroup) -> AccessGroup:
        """Create group."""
        await self._conn.execute(
            "INSERT INTO access_group (id, name, slug, owner_id, created_at) "
            "VALUES (%s, %s, %s, %s, %s)",
            (group.id, group.name, group.slug, group.owner_id, group.created_at),
        )
        return group


class PostgresMembershipRepository:
    """Group membership repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, group_id: UUID, user_id: str) -> GroupMembership | None:
        """Get membership of user in group."""
        cur = await self._conn.execute(
            "SELECT group_id, user_id, role, created_at FROM group_membership "
            "WHERE group_id = %s AND user_id = %s",
            (group_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return GroupMembership(group_id=r[0], user_id=r[1], role=Role(r[2]), created_at=r[3])

    async def list_roles(self, group_id: UUID, user_id: str) -> list[Role]:
        """Roles of user in group (at most one by construction)."""
        cur = await self._conn.execute(
            "SELECT role FROM group_membership WHERE group_id = %s AND user_id = %s",
            (group_id, user_id),
        )
        rows = await cur.fetchall()
        return [Role(r[0]) for r in rows]

    async def upsert(self, membership: GroupMembership) -> GroupMembership:
        """Insert membership or update the role of an existing one."""
        await self._conn.execute(
            "INSERT INTO group_membership (group_id, user_id, role, created_at) "
            "VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (group_id, user_id) DO UPDATE SET role = EXCLUDED.role",
            (
                membership.group_id,
                membership.user_id,
                str(membership.role),
                membership.created_at,
            ),
        )
        return membership

    async def delete(self, group_id: UUID, user_id: str) -> None:
        """Delete membership."""
        await self._conn.execute(
            "DELETE FROM group_membership WHERE group_id = %s AND user_id = %s",
            (group_id, user_id),
        )
