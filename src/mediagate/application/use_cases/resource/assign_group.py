"""Assign resource to group use case."""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

import structlog

from mediagate.application.authorization.group_access import group_capability
from mediagate.application.ports import AccessChecker
from mediagate.domain.entities import Resource
from mediagate.domain.exceptions import NotFound, PermissionDenied
from mediagate.domain.value_objects import AuthenticatedUser, Capability

logger = structlog.get_logger(__name__)


class AssignResourceGroupUseCase:
    """Move a resource into a group, or out of any group with group_id None.

    Actor must hold admin on the resource and, for a target group, admin on
    that group.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        access_checker: AccessChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self, actor_id: str, resource_id: UUID, group_id: UUID | None
    ) -> Resource:
        await self._access_checker.require(
            AuthenticatedUser(actor_id), resource_id, Capability.ADMIN
        )

        async with self._uow_factory() as uow:
            resource = await uow.resources.get_by_id(resource_id)
            if not resource:
                raise NotFound("Resource", str(resource_id))

            if group_id is not None:
                group = await uow.groups.get_by_id(group_id)
                if not group:
                    raise NotFound("AccessGroup", str(group_id))
                held = await group_capability(uow, group, actor_id)
                if held is None or held < Capability.ADMIN:
                    raise PermissionDenied("User does not have admin access to group")

            if resource.group_id == group_id:
                return resource

            await uow.generations.bump(resource_id)
            updated = replace(resource, group_id=group_id, updated_at=datetime.now(UTC))
            await uow.resources.update(updated)

        logger.info(
            "resource_group_assigned",
            resource_id=str(resource_id),
            group_id=str(group_id) if group_id else None,
            actor=actor_id,
        )
        return updated
