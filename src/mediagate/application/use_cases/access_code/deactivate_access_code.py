"""Deactivate access code use case."""

import structlog

from mediagate.domain.entities import AccessCode
from mediagate.domain.exceptions import NotFound, PermissionDenied
from mediagate.domain.value_objects import ScopeKind

logger = structlog.get_logger(__name__)


class DeactivateAccessCodeUseCase:
    """Revoke a code. Only its creator may do so."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, code: str) -> AccessCode:
        """Bump the scope's generations and deactivate, in one transaction."""
        async with self._uow_factory() as uow:
            access_code = await uow.access_codes.get_by_code(code)
            if not access_code:
                raise NotFound("AccessCode", code)
            if access_code.created_by != actor_id:
                raise PermissionDenied("Only the creator can deactivate an access code")
            if not access_code.is_active:
                return access_code

            if access_code.scope_kind == ScopeKind.GROUP:
                await uow.generations.bump_group(access_code.scope_id)
            else:
                await uow.generations.bump(access_code.scope_id)
            await uow.access_codes.set_active(code, False)
            access_code.is_active = False

        logger.info(
            "access_code_deactivated",
            created_by=actor_id,
            scope_kind=str(access_code.scope_kind),
            scope_id=str(access_code.scope_id),
        )
        return access_code
