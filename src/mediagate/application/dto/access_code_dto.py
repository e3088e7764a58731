"""Access code DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from mediagate.domain.value_objects import ScopeKind


@dataclass
class AccessCodeCreateInput:
    """Input for creating an access code."""

    scope_kind: ScopeKind
    scope_id: UUID
    code: str | None = None
    description: str | None = None
    expires_at: datetime | None = None
