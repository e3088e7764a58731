"""Authorization decision values."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from mediagate.domain.value_objects.capability import Capability


class GrantSource(StrEnum):
    """Independent rules that may contribute a capability."""

    OWNERSHIP = "ownership"
    GROUP_MEMBERSHIP = "group_membership"
    ACCESS_CODE = "access_code"
    PUBLIC = "public"


class DenyReason(StrEnum):
    """Why a request was denied. Survives unchanged to the HTTP boundary."""

    NO_CREDENTIALS = "no_credentials"
    INSUFFICIENT_ROLE = "insufficient_role"
    INSUFFICIENT_CAPABILITY = "insufficient_capability"
    CODE_NOT_FOUND = "code_not_found"
    CODE_REVOKED = "code_revoked"
    CODE_EXPIRED = "code_expired"
    CODE_SCOPE_MISMATCH = "code_scope_mismatch"
    RESOURCE_NOT_FOUND = "resource_not_found"


@dataclass(frozen=True)
class Allow:
    """Access granted with the highest capability any source produced.

    expires_at is set when the grant lapses on its own (an access code).
    """

    capability: Capability
    source: GrantSource
    expires_at: datetime | None = field(default=None, compare=False)

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class Deny:
    """Access refused."""

    reason: DenyReason
    required: Capability | None = None

    @property
    def allowed(self) -> bool:
        return False


@dataclass(frozen=True)
class Indeterminate:
    """Storage was unavailable; callers must treat this as a denial."""

    detail: str

    @property
    def allowed(self) -> bool:
        return False


Decision = Allow | Deny | Indeterminate
