"""PostgreSQL access audit log repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from mediagate.domain.entities import AuditEntry

_COLUMNS = (
    "id, resource_id, subject_fingerprint, capability_requested, access_granted, outcome, "
    "created_at, user_id, access_code, capability_granted, source, ip_address, user_agent"
)


def _row_to_entry(r: tuple) -> AuditEntry:
    return AuditEntry(
        id=r[0],
        resource_id=r[1],
        subject_fingerprint=r[2],
        capability_requested=r[3],
        access_granted=r[4],
        outcome=r[5],
        created_at=r[6],
        user_id=r[7],
        access_code=r[8],
        capability_granted=r[9],
        source=r[10],
        ip_address=r[11],
        user_agent=r[12],
    )


class PostgresAuditRepository:
    """Audit log repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def record(self, entry: AuditEntry) -> None:
        """Insert audit entry."""
        await self._conn.execute(
            f"INSERT INTO access_audit_log ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.resource_id,
                entry.subject_fingerprint,
                entry.capability_requested,
                entry.access_granted,
                entry.outcome,
                entry.created_at,
                entry.user_id,
                entry.access_code,
                entry.capability_granted,
                entry.source,
                entry.ip_address,
                entry.user_agent,
            ),
        )

    async def list_for_resource(self, resource_id: UUID, limit: int = 50) -> list[AuditEntry]:
        """Latest entries for resource."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_audit_log WHERE resource_id = %s "
            "ORDER BY created_at DESC LIMIT %s",
            (resource_id, limit),
        )
        rows = await cur.fetchall()
        return [_row_to_entry(r) for r in rows]
