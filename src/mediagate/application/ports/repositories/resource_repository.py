"""Resource repository port."""

from typing import Protocol
from uuid import UUID

from mediagate.domain.entities import Resource
from mediagate.domain.value_objects import ResourceKind


class ResourceRepository(Protocol):
    """Port for resource persistence."""

    async def get_by_id(self, resource_id: UUID) -> Resource | None: ...

    async def get_by_slug(self, kind: ResourceKind, slug: str) -> Resource | None: ...

    async def list_by_group(self, group_id: UUID) -> list[Resource]: ...

    async def create(self, resource: Resource) -> Resource: ...

    async def update(self, resource: Resource) -> None: ...
