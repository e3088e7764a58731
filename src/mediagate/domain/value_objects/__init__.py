"""Domain value objects."""

from mediagate.domain.value_objects.capability import Capability
from mediagate.domain.value_objects.decision import (
    Allow,
    Decision,
    Deny,
    DenyReason,
    GrantSource,
    Indeterminate,
)
from mediagate.domain.value_objects.delegation_token import DelegationToken
from mediagate.domain.value_objects.resource_kind import ResourceKind
from mediagate.domain.value_objects.role import Role
from mediagate.domain.value_objects.scope_kind import ScopeKind
from mediagate.domain.value_objects.subject import (
    Anonymous,
    AuthenticatedUser,
    CodeBearer,
    Subject,
)

__all__ = [
    "Allow",
    "Anonymous",
    "AuthenticatedUser",
    "Capability",
    "CodeBearer",
    "Decision",
    "DelegationToken",
    "Deny",
    "DenyReason",
    "GrantSource",
    "Indeterminate",
    "ResourceKind",
    "Role",
    "ScopeKind",
    "Subject",
]
