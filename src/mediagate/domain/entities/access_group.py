"""Access group entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class AccessGroup:
    """Group sharing a set of resources among its members."""

    id: UUID
    name: str
    slug: str
    owner_id: str
    created_at: datetime
