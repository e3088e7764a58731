"""Access checker port - the per-request authorization entry point."""

from typing import Protocol
from uuid import UUID

from mediagate.domain.value_objects import Allow, Capability, Decision, Subject


class AccessChecker(Protocol):
    """Port for deciding whether a subject holds a capability on a resource."""

    async def check_access(
        self, subject: Subject, resource_id: UUID, required: Capability
    ) -> Decision: ...

    async def require(
        self, subject: Subject, resource_id: UUID, required: Capability
    ) -> Allow: ...
