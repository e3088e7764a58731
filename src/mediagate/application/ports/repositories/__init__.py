"""Repository ports."""

from mediagate.application.ports.repositories.access_code_repository import (
    AccessCodeRepository,
)
from mediagate.application.ports.repositories.audit_repository import AuditRepository
from mediagate.application.ports.repositories.generation_repository import (
    GenerationRepository,
)
from mediagate.application.ports.repositories.group_repository import (
    GroupRepository,
    MembershipRepository,
)
from mediagate.application.ports.repositories.resource_repository import (
    ResourceRepository,
)

__all__ = [
    "AccessCodeRepository",
    "AuditRepository",
    "GenerationRepository",
    "GroupRepository",
    "MembershipRepository",
    "ResourceRepository",
]
