"""Subject resolver - classifies request credentials into a Subject."""

from dataclasses import dataclass

from mediagate.domain.value_objects import Anonymous, AuthenticatedUser, CodeBearer, Subject


@dataclass(frozen=True)
class Credentials:
    """Raw credentials of one request.

    user_id is set only when the session collaborator already verified a live
    session. access_code is the raw string from the query or header.
    """

    user_id: str | None = None
    access_code: str | None = None


def resolve_subject(credentials: Credentials) -> Subject:
    """Session first, then access code, else anonymous.

    The code is carried unvalidated so that invalid or expired codes are
    reported through the access decision.
    """
    code = (credentials.access_code or "").strip() or None
    if credentials.user_id:
        return AuthenticatedUser(user_id=credentials.user_id, fallback_code=code)
    if code:
        return CodeBearer(code=code)
    return Anonymous()
