"""Audit log entry for access decisions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class AuditEntry:
    """One recorded access decision."""

    id: UUID
    resource_id: UUID
    subject_fingerprint: str
    capability_requested: str
    access_granted: bool
    outcome: str
    created_at: datetime
    user_id: str | None = None
    access_code: str | None = None
    capability_granted: str | None = None
    source: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    @property
    def is_security_event(self) -> bool:
        return not self.access_granted
