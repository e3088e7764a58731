"""Remove group member use case."""

from uuid import UUID

import structlog

from mediagate.application.authorization.group_access import group_capability
from mediagate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from mediagate.domain.value_objects import Capability

logger = structlog.get_logger(__name__)


class RemoveGroupMemberUseCase:
    """Remove a member from a group. Actor must be group admin."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, group_id: UUID, user_id: str) -> None:
        async with self._uow_factory() as uow:
            group = await uow.groups.get_by_id(group_id)
            if not group:
                raise NotFound("AccessGroup", str(group_id))
            held = await group_capability(uow, group, actor_id)
            if held is None or held < Capability.ADMIN:
                raise PermissionDenied("User does not have admin access to group")
            if user_id == group.owner_id:
                raise ValidationError("The group owner cannot be removed")

            membership = await uow.memberships.get(group_id, user_id)
            if not membership:
                raise NotFound("GroupMembership", f"{group_id}/{user_id}")

            await uow.generations.bump_group(group_id)
            await uow.memberships.delete(group_id, user_id)

        logger.info("group_member_removed", group_id=str(group_id), user_id=user_id, actor=actor_id)
