"""Group roles."""

from enum import StrEnum


class Role(StrEnum):
    """Role a user holds inside an access group."""

    VIEWER = "viewer"
    CONTRIBUTOR = "contributor"
    EDITOR = "editor"
    ADMIN = "admin"
