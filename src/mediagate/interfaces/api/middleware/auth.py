"""Auth middleware - resolves the request subject from session and access code."""

from dataclasses import dataclass

import falcon.asgi

from mediagate.application.authorization.subject_resolver import Credentials, resolve_subject
from mediagate.application.ports import SessionVerifier

ACCESS_CODE_HEADER = "X-Access-Code"
ACCESS_CODE_PARAM = "code"


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str


class AuthMiddleware:
    """Sets req.context.user (or None) and req.context.subject.

    The bearer token is verified by the session collaborator. The access code
    is passed through unvalidated; the decision engine reports bad codes.
    """

    def __init__(self, session_verifier: SessionVerifier | None = None) -> None:
        self._session_verifier = session_verifier

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract credentials from Authorization header and code param/header."""
        user_id = None
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer ") and self._session_verifier:
            user_id = self._session_verifier.verify(auth[7:])

        code = req.get_param(ACCESS_CODE_PARAM) or req.get_header(ACCESS_CODE_HEADER)
        req.context.user = RequestUser(user_id=user_id) if user_id else None
        req.context.subject = resolve_subject(Credentials(user_id=user_id, access_code=code))
