"""Revocation generation repository port."""

from typing import Protocol
from uuid import UUID


class GenerationRepository(Protocol):
    """Port for per-resource revocation generation counters.

    bump and bump_group must be single atomic increments executed inside the
    caller's transaction, before it commits.
    """

    async def current(self, resource_id: UUID) -> int: ...

    async def bump(self, resource_id: UUID) -> int: ...

    async def bump_group(self, group_id: UUID) -> int: ...
