"""Access group and membership repository ports."""

from typing import Protocol
from uuid import UUID

from mediagate.domain.entities import AccessGroup, GroupMembership
from mediagate.domain.value_objects import Role


class GroupRepository(Protocol):
    """Port for access group persistence."""

    async def get_by_id(self, group_id: UUID) -> AccessGroup | None: ...

    async def get_by_slug(self, slug: str) -> AccessGroup | None: ...

    async def create(self, group: AccessGroup) -> AccessGroup: ...


class MembershipRepository(Protocol):
    """Port for group membership persistence."""

    async def get(self, group_id: UUID, user_id: str) -> GroupMembership | None: ...

    async def list_roles(self, group_id: UUID, user_id: str) -> list[Role]: ...

    async def upsert(self, membership: GroupMembership) -> GroupMembership: ...

    async def delete(self, group_id: UUID, user_id: str) -> None: ...
