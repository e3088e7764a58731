"""Add group member use case."""

from datetime import UTC, datetime
from uuid import UUID

import structlog

from mediagate.application.authorization.group_access import group_capability
from mediagate.domain.entities import GroupMembership
from mediagate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from mediagate.domain.value_objects import Capability, Role

logger = structlog.get_logger(__name__)


class AddGroupMemberUseCase:
    """Add a member to a group or change their role. Actor must be group admin."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor_id: str,
        group_id: UUID,
        user_id: str,
        role_name: str,
    ) -> GroupMembership:
        try:
            role = Role(role_name)
        except ValueError as e:
            raise ValidationError(f"Unknown role: {role_name}") from e

        async with self._uow_factory() as uow:
            group = await uow.groups.get_by_id(group_id)
            if not group:
                raise NotFound("AccessGroup", str(group_id))
            held = await group_capability(uow, group, actor_id)
            if held is None or held < Capability.ADMIN:
                raise PermissionDenied("User does not have admin access to group")

            existing = await uow.memberships.get(group_id, user_id)
            if existing and existing.role == role:
                return existing
            if existing:
                # A role change may lower access; outstanding tokens must be rechecked.
                await uow.generations.bump_group(group_id)

            membership = await uow.memberships.upsert(
                GroupMembership(
                    group_id=group_id,
                    user_id=user_id,
                    role=role,
                    created_at=existing.created_at if existing else datetime.now(UTC),
                )
            )

        logger.info(
            "group_member_set",
            group_id=str(group_id),
            user_id=user_id,
            role=str(role),
            actor=actor_id,
        )
        return membership
