"""Grant sources - independent rules that may contribute a capability.

Each source is a pure function over an AccessFacts snapshot. Sources never
veto each other; the decision engine takes the maximum of what they grant.
"""

from dataclasses import dataclass, field
from datetime import datetime

from mediagate.domain.entities import AccessCode, Resource
from mediagate.domain.permission_lattice import capability_of, highest
from mediagate.domain.value_objects import (
    AuthenticatedUser,
    Capability,
    CodeBearer,
    DenyReason,
    GrantSource,
    Role,
    Subject,
)


@dataclass(frozen=True)
class AccessFacts:
    """Committed state needed to evaluate every source for one request."""

    resource: Resource
    now: datetime
    membership_roles: tuple[Role, ...] = field(default_factory=tuple)
    access_code: AccessCode | None = None


@dataclass(frozen=True)
class Grant:
    """Result of one source: a capability, nothing, or nothing with a reason."""

    source: GrantSource
    capability: Capability | None = None
    denial: DenyReason | None = None

    @property
    def granted(self) -> bool:
        return self.capability is not None


def presented_code(subject: Subject) -> str | None:
    """Access code carried by the subject, if any."""
    if isinstance(subject, CodeBearer):
        return subject.code
    if isinstance(subject, AuthenticatedUser):
        return subject.fallback_code
    return None


def ownership_grant(subject: Subject, facts: AccessFacts) -> Grant:
    if isinstance(subject, AuthenticatedUser) and subject.user_id == facts.resource.owner_id:
        return Grant(GrantSource.OWNERSHIP, Capability.ADMIN)
    return Grant(GrantSource.OWNERSHIP)


def membership_grant(subject: Subject, facts: AccessFacts) -> Grant:
    """capability_of(role) for the subject's role in the resource's group.

    Duplicate membership rows should not exist; if they do the highest wins.
    """
    if not isinstance(subject, AuthenticatedUser) or facts.resource.group_id is None:
        return Grant(GrantSource.GROUP_MEMBERSHIP)
    capability = highest(capability_of(role) for role in facts.membership_roles)
    return Grant(GrantSource.GROUP_MEMBERSHIP, capability)


def validate_code(access_code: AccessCode | None, now: datetime) -> DenyReason | None:
    """Reason a looked-up code is unusable, or None when it is usable."""
    if access_code is None:
        return DenyReason.CODE_NOT_FOUND
    if not access_code.is_active:
        return DenyReason.CODE_REVOKED
    if access_code.is_expired(now):
        return DenyReason.CODE_EXPIRED
    return None


def access_code_grant(subject: Subject, facts: AccessFacts) -> Grant:
    """Read on resources in the code's scope. Codes never grant above read."""
    if presented_code(subject) is None:
        return Grant(GrantSource.ACCESS_CODE)
    denial = validate_code(facts.access_code, facts.now)
    if denial is not None:
        return Grant(GrantSource.ACCESS_CODE, denial=denial)
    if not facts.access_code.covers(facts.resource.id, facts.resource.group_id):
        return Grant(GrantSource.ACCESS_CODE, denial=DenyReason.CODE_SCOPE_MISMATCH)
    return Grant(GrantSource.ACCESS_CODE, Capability.READ)


def public_grant(subject: Subject, facts: AccessFacts) -> Grant:
    if facts.resource.is_public:
        return Grant(GrantSource.PUBLIC, Capability.READ)
    return Grant(GrantSource.PUBLIC)


GRANT_SOURCES = (
    ownership_grant,
    membership_grant,
    access_code_grant,
    public_grant,
)


def evaluate_grants(subject: Subject, facts: AccessFacts) -> list[Grant]:
    """Run every source against the same facts."""
    return [source(subject, facts) for source in GRANT_SOURCES]
