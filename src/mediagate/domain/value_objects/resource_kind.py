"""Media resource kinds."""

from enum import StrEnum


class ResourceKind(StrEnum):
    """Kinds of media that can be access-controlled."""

    VIDEO = "video"
    IMAGE = "image"
