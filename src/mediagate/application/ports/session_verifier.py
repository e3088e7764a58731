"""Session verifier port - external session/OIDC collaborator."""

from typing import Protocol


class SessionVerifier(Protocol):
    """Resolves a session handle to a live user id, or None."""

    def verify(self, session_handle: str) -> str | None: ...
