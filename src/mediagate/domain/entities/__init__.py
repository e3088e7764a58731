"""Domain entities."""

from mediagate.domain.entities.access_code import AccessCode
from mediagate.domain.entities.access_group import AccessGroup
from mediagate.domain.entities.audit_entry import AuditEntry
from mediagate.domain.entities.group_membership import GroupMembership
from mediagate.domain.entities.resource import Resource

__all__ = [
    "AccessCode",
    "AccessGroup",
    "AuditEntry",
    "GroupMembership",
    "Resource",
]
