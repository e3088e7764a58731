"""Create access group use case."""

import re
from datetime import UTC, datetime
from uuid import uuid4

from mediagate.domain.entities import AccessGroup, GroupMembership
from mediagate.domain.exceptions import Conflict, ValidationError
from mediagate.domain.value_objects import Role


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class CreateGroupUseCase:
    """Create group and make its creator an admin member."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, owner_id: str, name: str, slug: str | None = None) -> AccessGroup:
        name = name.strip()
        if not name:
            raise ValidationError("Group name is required")
        slug = slugify(slug or name)
        if not slug:
            raise ValidationError("Group slug is empty")

        async with self._uow_factory() as uow:
            if await uow.groups.get_by_slug(slug):
                raise Conflict(f"Group slug already exists: {slug}")

            now = datetime.now(UTC)
            group = AccessGroup(
                id=uuid4(),
                name=name,
                slug=slug,
                owner_id=owner_id,
                created_at=now,
            )
            await uow.groups.create(group)
            await uow.memberships.upsert(
                GroupMembership(
                    group_id=group.id,
                    user_id=owner_id,
                    role=Role.ADMIN,
                    created_at=now,
                )
            )

        return group
