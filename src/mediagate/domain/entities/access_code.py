"""Access code entity - shareable, time-bound read access."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from mediagate.domain.value_objects import ScopeKind


@dataclass
class AccessCode:
    """Access code scoped to a single resource or to a whole group.

    A group-scoped code covers whatever resources the group holds at access
    time. expires_at None means the code never lapses on its own.
    """

    code: str
    scope_kind: ScopeKind
    scope_id: UUID
    created_by: str
    created_at: datetime
    expires_at: datetime | None = None
    is_active: bool = True
    description: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now > self.expires_at

    def covers(self, resource_id: UUID, resource_group_id: UUID | None) -> bool:
        """Whether the scope includes a resource with the given current group."""
        if self.scope_kind == ScopeKind.RESOURCE:
            return self.scope_id == resource_id
        return resource_group_id is not None and self.scope_id == resource_group_id
