"""List access codes use case."""

from mediagate.domain.entities import AccessCode


class ListAccessCodesUseCase:
    """Codes created by the actor, newest first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str) -> list[AccessCode]:
        async with self._uow_factory() as uow:
            codes = await uow.access_codes.list_by_creator(actor_id)
        return sorted(codes, key=lambda c: c.created_at, reverse=True)
