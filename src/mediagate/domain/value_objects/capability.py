"""Capability levels for media access."""

from enum import StrEnum


class Capability(StrEnum):
    """Ordered capabilities: read < download < edit < admin.

    Comparison operators follow the capability order, not the string value.
    """

    READ = "read"
    DOWNLOAD = "download"
    EDIT = "edit"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Capability):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Capability):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Capability):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Capability):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {
    Capability.READ: 1,
    Capability.DOWNLOAD: 2,
    Capability.EDIT: 3,
    Capability.ADMIN: 4,
}
