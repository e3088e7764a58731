"""Permission lattice - capability order and the fixed role table."""

from collections.abc import Iterable

from mediagate.domain.value_objects import Capability, Role

ROLE_CAPABILITIES: dict[Role, Capability] = {
    Role.VIEWER: Capability.READ,
    Role.CONTRIBUTOR: Capability.DOWNLOAD,
    Role.EDITOR: Capability.EDIT,
    Role.ADMIN: Capability.ADMIN,
}


def implies(held: Capability, required: Capability) -> bool:
    """A held capability implies every capability at or below it."""
    return held >= required


def capability_of(role: Role) -> Capability:
    return ROLE_CAPABILITIES[role]


def highest(capabilities: Iterable[Capability | None]) -> Capability | None:
    """Maximum of the given capabilities, ignoring None. None if nothing granted."""
    granted = [c for c in capabilities if c is not None]
    return max(granted) if granted else None

