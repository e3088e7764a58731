"""Register resource use case."""

from datetime import UTC, datetime
from uuid import uuid4

from mediagate.domain.entities import Resource
from mediagate.domain.exceptions import Conflict, ValidationError
from mediagate.domain.value_objects import ResourceKind


class RegisterResourceUseCase:
    """Register an uploaded video or image under its owner, private and ungrouped."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        owner_id: str,
        kind: ResourceKind,
        slug: str,
        title: str | None = None,
    ) -> Resource:
        slug = slug.strip()
        if not slug:
            raise ValidationError("Resource slug is required")

        async with self._uow_factory() as uow:
            if await uow.resources.get_by_slug(kind, slug):
                raise Conflict(f"{kind} already exists: {slug}")

            now = datetime.now(UTC)
            resource = Resource(
                id=uuid4(),
                kind=kind,
                slug=slug,
                title=title or slug,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
            await uow.resources.create(resource)

        return resource
