"""Set resource visibility use case."""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

import structlog

from mediagate.application.ports import AccessChecker
from mediagate.domain.entities import Resource
from mediagate.domain.exceptions import NotFound
from mediagate.domain.value_objects import AuthenticatedUser, Capability

logger = structlog.get_logger(__name__)


class SetResourceVisibilityUseCase:
    """Make a resource public or private. Actor must hold edit."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_checker: AccessChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor_id: str, resource_id: UUID, is_public: bool) -> Resource:
        await self._access_checker.require(
            AuthenticatedUser(actor_id), resource_id, Capability.EDIT
        )

        async with self._uow_factory() as uow:
            resource = await uow.resources.get_by_id(resource_id)
            if not resource:
                raise NotFound("Resource", str(resource_id))
            if resource.is_public == is_public:
                return resource

            await uow.generations.bump(resource_id)
            updated = replace(resource, is_public=is_public, updated_at=datetime.now(UTC))
            await uow.resources.update(updated)

        logger.info(
            "resource_visibility_changed",
            resource_id=str(resource_id),
            is_public=is_public,
            actor=actor_id,
        )
        return updated
