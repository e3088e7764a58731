"""Resolved requester identities."""

import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """Requester with a live session.

    fallback_code is an access code presented alongside the session. It is
    consulted in addition to the user's own grants and can only add access.
    """

    user_id: str
    fallback_code: str | None = None

    @property
    def fingerprint(self) -> str:
        return f"user:{self.user_id}"


@dataclass(frozen=True)
class CodeBearer:
    """Requester identified only by an access code (not yet validated)."""

    code: str

    @property
    def fingerprint(self) -> str:
        digest = hashlib.sha256(self.code.encode("utf-8")).hexdigest()[:32]
        return f"code:{digest}"


@dataclass(frozen=True)
class Anonymous:
    """Requester without any credentials."""

    @property
    def fingerprint(self) -> str:
        return "anonymous"


Subject = AuthenticatedUser | CodeBearer | Anonymous
