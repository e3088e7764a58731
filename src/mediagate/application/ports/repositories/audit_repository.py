"""Audit log repository port."""

from typing import Protocol
from uuid import UUID

from mediagate.domain.entities import AuditEntry


class AuditRepository(Protocol):
    """Port for access decision audit log."""

    async def record(self, entry: AuditEntry) -> None: ...

    async def list_for_resource(self, resource_id: UUID, limit: int = 50) -> list[AuditEntry]: ...
