"""Authorization decision engine.

Combines ownership, group membership, access code and public visibility
grants into one decision per (subject, resource, capability) request.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from mediagate.application.authorization.grant_sources import (
    AccessFacts,
    Grant,
    evaluate_grants,
    presented_code,
    validate_code,
)
from mediagate.domain.entities import AuditEntry, Resource
from mediagate.domain.exceptions import PermissionDenied, StorageUnavailable
from mediagate.domain.permission_lattice import implies
from mediagate.domain.value_objects import (
    Allow,
    Anonymous,
    AuthenticatedUser,
    Capability,
    CodeBearer,
    Decision,
    Deny,
    DenyReason,
    GrantSource,
    Indeterminate,
    ScopeKind,
    Subject,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Client details recorded in the audit log."""

    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class CodeScopeListing:
    """Resources covered by a code, or the reason the code is unusable."""

    reason: DenyReason | None = None
    resources: list[Resource] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.reason is None


def decide(subject: Subject, facts: AccessFacts, required: Capability) -> Decision:
    """Max-reduce the grants and pick the denial reason when it falls short."""
    grants = evaluate_grants(subject, facts)
    best: Grant | None = None
    for grant in grants:
        if grant.granted and (best is None or grant.capability > best.capability):
            best = grant

    if best is not None and implies(best.capability, required):
        expires_at = None
        if best.source == GrantSource.ACCESS_CODE:
            expires_at = facts.access_code.expires_at
        return Allow(capability=best.capability, source=best.source, expires_at=expires_at)

    return Deny(reason=_denial_reason(subject, grants), required=required)


def _denial_reason(subject: Subject, grants: list[Grant]) -> DenyReason:
    by_source = {g.source: g for g in grants}
    code_grant = by_source[GrantSource.ACCESS_CODE]

    if isinstance(subject, CodeBearer):
        return code_grant.denial or DenyReason.INSUFFICIENT_CAPABILITY

    if isinstance(subject, AuthenticatedUser):
        own_grant = (
            by_source[GrantSource.OWNERSHIP].granted
            or by_source[GrantSource.GROUP_MEMBERSHIP].granted
        )
        if not own_grant and code_grant.denial is not None:
            return code_grant.denial
        return DenyReason.INSUFFICIENT_ROLE

    if any(g.granted for g in grants):
        return DenyReason.INSUFFICIENT_CAPABILITY
    return DenyReason.NO_CREDENTIALS


class AuthorizationEngine:
    """Single entry point for per-request authorization.

    check_access reads committed state only and never raises: storage
    failures become Indeterminate, which callers must treat as a denial.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        audit_enabled: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit_enabled = audit_enabled
        self._clock = clock or (lambda: datetime.now(UTC))

    async def check_access(
        self,
        subject: Subject,
        resource_id: UUID,
        required: Capability,
        context: RequestContext | None = None,
    ) -> Decision:
        """Decide whether subject holds required on resource_id."""
        logger.debug(
            "access_check",
            subject=subject.fingerprint,
            resource_id=str(resource_id),
            required=str(required),
        )
        try:
            async with self._uow_factory() as uow:
                facts = await self._load_facts(uow, subject, resource_id)
        except StorageUnavailable as e:
            logger.error(
                "access_check_indeterminate",
                resource_id=str(resource_id),
                error=str(e),
            )
            return Indeterminate(detail=str(e))

        if facts is None:
            decision: Decision = Deny(reason=DenyReason.RESOURCE_NOT_FOUND, required=required)
        else:
            decision = decide(subject, facts, required)

        if isinstance(decision, Allow):
            logger.info(
                "access_granted",
                resource_id=str(resource_id),
                subject=subject.fingerprint,
                capability=str(decision.capability),
                source=str(decision.source),
            )
        else:
            logger.warning(
                "access_denied",
                resource_id=str(resource_id),
                subject=subject.fingerprint,
                required=str(required),
                reason=str(decision.reason),
            )

        await self._audit(subject, resource_id, required, decision, context)
        return decision

    async def require(
        self, subject: Subject, resource_id: UUID, required: Capability
    ) -> Allow:
        """check_access for use cases: raise PermissionDenied unless allowed."""
        decision = await self.check_access(subject, resource_id, required)
        if not isinstance(decision, Allow):
            if isinstance(decision, Indeterminate):
                raise StorageUnavailable(decision.detail)
            raise PermissionDenied(f"{required} access denied: {decision.reason}")
        return decision

    async def effective_capability(
        self, subject: Subject, resource_id: UUID
    ) -> Capability | None:
        """Highest capability the subject holds on the resource, if any."""
        decision = await self.check_access(subject, resource_id, Capability.READ)
        if isinstance(decision, Allow):
            return decision.capability
        return None

    async def batch_check_access(
        self,
        subject: Subject,
        resource_ids: list[UUID],
        required: Capability,
    ) -> dict[UUID, Decision]:
        """check_access for each resource id."""
        return {
            resource_id: await self.check_access(subject, resource_id, required)
            for resource_id in resource_ids
        }

    async def resolve_code_scope(self, code: str) -> CodeScopeListing:
        """Validate a code and list every resource it currently covers.

        Raises StorageUnavailable if the store cannot be read.
        """
        now = self._clock()
        async with self._uow_factory() as uow:
            access_code = await uow.access_codes.get_by_code(code)
            reason = validate_code(access_code, now)
            if reason is not None:
                logger.warning("code_scope_rejected", reason=str(reason))
                return CodeScopeListing(reason=reason)

            if access_code.scope_kind == ScopeKind.GROUP:
                resources = await uow.resources.list_by_group(access_code.scope_id)
            else:
                resource = await uow.resources.get_by_id(access_code.scope_id)
                resources = [resource] if resource else []

        resources = sorted(resources, key=lambda r: (r.created_at, str(r.id)))
        return CodeScopeListing(resources=resources)

    async def list_resources_for_code_scope(self, code: str) -> list[Resource]:
        """Resources covered by a valid code; empty for an unusable code."""
        listing = await self.resolve_code_scope(code)
        return listing.resources

    async def _load_facts(
        self, uow, subject: Subject, resource_id: UUID
    ) -> AccessFacts | None:
        resource = await uow.resources.get_by_id(resource_id)
        if resource is None:
            return None

        roles: tuple = ()
        if isinstance(subject, AuthenticatedUser) and resource.group_id is not None:
            roles = tuple(await uow.memberships.list_roles(resource.group_id, subject.user_id))

        code = presented_code(subject)
        access_code = await uow.access_codes.get_by_code(code) if code else None

        return AccessFacts(
            resource=resource,
            now=self._clock(),
            membership_roles=roles,
            access_code=access_code,
        )

    async def _audit(
        self,
        subject: Subject,
        resource_id: UUID,
        required: Capability,
        decision: Decision,
        context: RequestContext | None,
    ) -> None:
        if not self._audit_enabled:
            return
        context = context or RequestContext()
        granted = decision if isinstance(decision, Allow) else None
        entry = AuditEntry(
            id=uuid4(),
            resource_id=resource_id,
            subject_fingerprint=subject.fingerprint,
            capability_requested=str(required),
            access_granted=granted is not None,
            outcome=_outcome(decision),
            created_at=self._clock(),
            user_id=subject.user_id if isinstance(subject, AuthenticatedUser) else None,
            access_code=None if isinstance(subject, Anonymous) else presented_code(subject),
            capability_granted=str(granted.capability) if granted else None,
            source=str(granted.source) if granted else None,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
        )
        try:
            async with self._uow_factory() as uow:
                await uow.audit.record(entry)
        except StorageUnavailable as e:
            # A lost audit row never changes the decision.
            logger.warning("audit_write_failed", resource_id=str(resource_id), error=str(e))


def _outcome(decision: Decision) -> str:
    if isinstance(decision, Allow):
        return "allow"
    if isinstance(decision, Deny):
        return str(decision.reason)
    return "indeterminate"
