"""PostgreSQL access code repository implementation."""

from psycopg import AsyncConnection

from mediagate.domain.entities import AccessCode
from mediagate.domain.value_objects import ScopeKind

_COLUMNS = (
    "code, resource_id, group_id, created_by, created_at, expires_at, is_active, description"
)


def _row_to_access_code(r: tuple) -> AccessCode:
    if r[1] is not None:
        scope_kind, scope_id = ScopeKind.RESOURCE, r[1]
    else:
        scope_kind, scope_id = ScopeKind.GROUP, r[2]
    return AccessCode(
        code=r[0],
        scope_kind=scope_kind,
        scope_id=scope_id,
        created_by=r[3],
        created_at=r[4],
        expires_at=r[5],
        is_active=r[6],
        description=r[7],
    )


class PostgresAccessCodeRepository:
    """Access code repository implementation.

    The scope is stored as two nullable foreign keys, exactly one set.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_code(self, code: str) -> AccessCode | None:
        """Get code regardless of state; callers decide on active/expired."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_code WHERE code = %s",
            (code,),
        )
        r = await cur.fetchone()
        return _row_to_access_code(r) if r else None

    async def list_by_creator(self, created_by: str) -> list[AccessCode]:
        """List codes created by user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_code WHERE created_by = %s ORDER BY created_at DESC",
            (created_by,),
        )
        rows = await cur.fetchall()
        return [_row_to_access_code(r) for r in rows]

    async def create(self, access_code: AccessCode) -> AccessCode:
        """Create code."""
        is_resource = access_code.scope_kind == ScopeKind.RESOURCE
        await self._conn.execute(
            f"INSERT INTO access_code ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                access_code.code,
                access_code.scope_id if is_resource else None,
                None if is_resource else access_code.scope_id,
                access_code.created_by,
                access_code.created_at,
                access_code.expires_at,
                access_code.is_active,
                access_code.description,
            ),
        )
        return access_code

    async def set_active(self, code: str, is_active: bool) -> None:
        """Activate or deactivate code."""
        await self._conn.execute(
            "UPDATE access_code SET is_active = %s WHERE code = %s",
            (is_active, code),
        )
