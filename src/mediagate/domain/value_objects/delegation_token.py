"""Delegation token for streaming sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from mediagate.domain.value_objects.capability import Capability


@dataclass(frozen=True)
class DelegationToken:
    """Proof that a full access check succeeded for one stream.

    Bound to a resource, a capability and a subject fingerprint, and tagged
    with the resource's revocation generation at mint time.
    """

    token_id: str
    resource_id: UUID
    capability: Capability
    subject_fingerprint: str
    issued_at: datetime
    expires_at: datetime
    generation: int

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
