"""Access code repository port."""

from typing import Protocol

from mediagate.domain.entities import AccessCode


class AccessCodeRepository(Protocol):
    """Port for access code persistence."""

    async def get_by_code(self, code: str) -> AccessCode | None: ...

    async def list_by_creator(self, created_by: str) -> list[AccessCode]: ...

    async def create(self, access_code: AccessCode) -> AccessCode: ...

    async def set_active(self, code: str, is_active: bool) -> None: ...
