"""Unit tests for the signed delegation token encoding."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt

from mediagate.domain.value_objects import Capability, DelegationToken
from mediagate.infrastructure.streaming.jwt_token_codec import JWTTokenCodec

SECRET = "test-secret-with-at-least-32-bytes!"


def _token(expires_in: int = 600) -> DelegationToken:
    now = datetime.now(UTC).replace(microsecond=0)
    return DelegationToken(
        token_id="tok-1",
        resource_id=uuid4(),
        capability=Capability.READ,
        subject_fingerprint="user:u1",
        issued_at=now,
        expires_at=now + timedelta(seconds=expires_in),
        generation=3,
    )


def test_decode_restores_token() -> None:
    codec = JWTTokenCodec(SECRET)
    token = _token()
    assert codec.decode(codec.encode(token)) == token


def test_claims() -> None:
    token = _token()
    payload = jwt.decode(JWTTokenCodec(SECRET).encode(token), SECRET, algorithms=["HS256"])
    assert payload["rid"] == str(token.resource_id)
    assert payload["gen"] == 3
    assert payload["sub"] == "user:u1"


def test_wrong_secret_rejected() -> None:
    encoded = JWTTokenCodec(SECRET).encode(_token())
    assert JWTTokenCodec("another-secret-with-32-bytes-long").decode(encoded) is None


def test_expired_rejected() -> None:
    codec = JWTTokenCodec(SECRET)
    assert codec.decode(codec.encode(_token(expires_in=-60))) is None


def test_garbage_rejected() -> None:
    codec = JWTTokenCodec(SECRET)
    assert codec.decode("not-a-token") is None
    assert codec.decode(jwt.encode({"jti": "x"}, SECRET, algorithm="HS256")) is None
