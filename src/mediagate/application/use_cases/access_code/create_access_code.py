"""Create access code use case."""

import secrets
from datetime import UTC, datetime

import structlog

from mediagate.application.ports import AccessChecker
from mediagate.application.authorization.group_access import group_capability
from mediagate.application.dto.access_code_dto import AccessCodeCreateInput
from mediagate.domain.entities import AccessCode
from mediagate.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from mediagate.domain.value_objects import AuthenticatedUser, Capability, ScopeKind

logger = structlog.get_logger(__name__)


class CreateAccessCodeUseCase:
    """Create a code for a resource or group. Actor must hold admin on the target."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_checker: AccessChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor_id: str, input_data: AccessCodeCreateInput) -> AccessCode:
        now = datetime.now(UTC)
        if input_data.expires_at is not None and input_data.expires_at <= now:
            raise ValidationError("expires_at must be in the future")

        code = (input_data.code or "").strip() or secrets.token_urlsafe(9)

        if input_data.scope_kind == ScopeKind.RESOURCE:
            async with self._uow_factory() as uow:
                resource = await uow.resources.get_by_id(input_data.scope_id)
            if not resource:
                raise NotFound("Resource", str(input_data.scope_id))
            await self._access_checker.require(
                AuthenticatedUser(actor_id), input_data.scope_id, Capability.ADMIN
            )

        async with self._uow_factory() as uow:
            if input_data.scope_kind == ScopeKind.GROUP:
                group = await uow.groups.get_by_id(input_data.scope_id)
                if not group:
                    raise NotFound("AccessGroup", str(input_data.scope_id))
                held = await group_capability(uow, group, actor_id)
                if held is None or held < Capability.ADMIN:
                    raise PermissionDenied("User does not have admin access to group")

            if await uow.access_codes.get_by_code(code):
                raise Conflict(f"Access code already exists: {code}")

            access_code = AccessCode(
                code=code,
                scope_kind=input_data.scope_kind,
                scope_id=input_data.scope_id,
                created_by=actor_id,
                created_at=now,
                expires_at=input_data.expires_at,
                is_active=True,
                description=input_data.description,
            )
            await uow.access_codes.create(access_code)

        logger.info(
            "access_code_created",
            created_by=actor_id,
            scope_kind=str(access_code.scope_kind),
            scope_id=str(access_code.scope_id),
        )
        return access_code
