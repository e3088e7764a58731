"""Group membership entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from mediagate.domain.value_objects import Role


@dataclass
class GroupMembership:
    """User holds role in group."""

    group_id: UUID
    user_id: str
    role: Role
    created_at: datetime
