"""Domain exceptions."""


class MediaGateError(Exception):
    """Base exception for MediaGate."""

    pass


class PermissionDenied(MediaGateError):
    """Actor does not have the capability required for the requested action."""

    pass


class NotFound(MediaGateError):
    """Requested resource, group or access code was not found."""

    pass


class Conflict(MediaGateError):
    """Entity with the same unique key already exists."""

    pass


class ValidationError(MediaGateError):
    """Validation failed for input data."""

    pass


class StorageUnavailable(MediaGateError):
    """Backing store could not be reached; the outcome is indeterminate."""

    pass
