"""Resource entity - a video or image under access control."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from mediagate.domain.value_objects import ResourceKind


@dataclass
class Resource:
    """Media resource. owner_id is the creating user; group_id is optional."""

    id: UUID
    kind: ResourceKind
    slug: str
    title: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    group_id: UUID | None = None
    is_public: bool = False
