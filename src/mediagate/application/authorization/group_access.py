"""Capability a user holds on an access group itself."""

from mediagate.domain.entities import AccessGroup
from mediagate.domain.permission_lattice import capability_of, highest
from mediagate.domain.value_objects import Capability


async def group_capability(uow, group: AccessGroup, user_id: str) -> Capability | None:
    """Owner holds admin; members hold the capability of their highest role."""
    if group.owner_id == user_id:
        return Capability.ADMIN
    roles = await uow.memberships.list_roles(group.id, user_id)
    return highest(capability_of(role) for role in roles)
