"""Access code scope kinds."""

from enum import StrEnum


class ScopeKind(StrEnum):
    """What an access code covers: one resource or a whole group."""

    RESOURCE = "resource"
    GROUP = "group"
