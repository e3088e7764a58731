"""Signed transport encoding for delegation tokens."""

from datetime import UTC, datetime
from uuid import UUID

import jwt

from mediagate.domain.value_objects import Capability, DelegationToken

ALGORITHM = "HS256"


class JWTTokenCodec:
    """Encodes delegation tokens as HS256 JWTs and verifies them back."""

    def __init__(self, secret: str, algorithm: str = ALGORITHM) -> None:
        self._secret = secret
        self._algorithm = algorithm

    def encode(self, token: DelegationToken) -> str:
        payload = {
            "jti": token.token_id,
            "sub": token.subject_fingerprint,
            "rid": str(token.resource_id),
            "cap": str(token.capability),
            "gen": token.generation,
            "iat": int(token.issued_at.timestamp()),
            "exp": int(token.expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, value: str) -> DelegationToken | None:
        """Verify signature and expiry; None for anything unusable."""
        try:
            payload = jwt.decode(
                value,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["jti", "sub", "exp", "iat"]},
            )
            return DelegationToken(
                token_id=payload["jti"],
                resource_id=UUID(payload["rid"]),
                capability=Capability(payload["cap"]),
                subject_fingerprint=payload["sub"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
                generation=int(payload["gen"]),
            )
        except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
            return None
