"""Streaming delegation - authorize a stream once, validate segments cheaply.

A full access check mints a DelegationToken tagged with the resource's
revocation generation. Segment fetches only compare expiry and generation;
any grant-affecting write bumps the generation, so revocation applies to the
next segment without waiting for the token to expire.
"""

import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import structlog

from mediagate.application.ports import AccessChecker
from mediagate.domain.exceptions import StorageUnavailable
from mediagate.domain.value_objects import (
    Allow,
    Capability,
    Decision,
    DelegationToken,
    Indeterminate,
    Subject,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SegmentAuthorization:
    """Outcome of one segment fetch.

    token is the token the client should present next: the same one when it
    validated, a replacement after a successful fallback, None on denial.
    """

    allowed: bool
    token: DelegationToken | None = None
    decision: Decision | None = None
    fallback: bool = False

    @property
    def terminated(self) -> bool:
        return not self.allowed


class StreamDelegation:
    """Issues and validates delegation tokens for streamed resources."""

    def __init__(
        self,
        access_checker: AccessChecker,
        unit_of_work_factory: type,
        ttl_seconds: int = 1800,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._access_checker = access_checker
        self._uow_factory = unit_of_work_factory
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or (lambda: datetime.now(UTC))

    async def issue_stream_token(
        self,
        subject: Subject,
        resource_id: UUID,
        required: Capability = Capability.READ,
    ) -> DelegationToken | Decision:
        """Run a full check and mint a token on Allow, else return the decision."""
        # Generation is read before the check: a bump racing the check leaves
        # the token stale rather than blessing revoked state.
        try:
            generation = await self._current_generation(resource_id)
        except StorageUnavailable as e:
            return Indeterminate(detail=str(e))

        decision = await self._access_checker.check_access(subject, resource_id, required)
        if not isinstance(decision, Allow):
            return decision

        now = self._clock()
        expires_at = now + self._ttl
        if decision.expires_at is not None:
            expires_at = min(expires_at, decision.expires_at)
        token = DelegationToken(
            token_id=secrets.token_urlsafe(16),
            resource_id=resource_id,
            capability=required,
            subject_fingerprint=subject.fingerprint,
            issued_at=now,
            expires_at=expires_at,
            generation=generation,
        )
        logger.info(
            "stream_token_issued",
            resource_id=str(resource_id),
            subject=subject.fingerprint,
            generation=generation,
            expires_at=token.expires_at.isoformat(),
        )
        return token

    async def validate_stream_token(
        self,
        token: DelegationToken,
        subject: Subject | None = None,
        resource_id: UUID | None = None,
    ) -> bool:
        """Expiry, binding and generation check. One counter read, no grant logic."""
        if token.is_expired(self._clock()):
            logger.debug("stream_token_expired", token_id=token.token_id)
            return False
        if resource_id is not None and token.resource_id != resource_id:
            return False
        if subject is not None and token.subject_fingerprint != subject.fingerprint:
            return False
        try:
            generation = await self._current_generation(token.resource_id)
        except StorageUnavailable:
            return False
        if generation != token.generation:
            logger.info(
                "stream_token_stale",
                token_id=token.token_id,
                resource_id=str(token.resource_id),
                token_generation=token.generation,
                current_generation=generation,
            )
            return False
        return True

    async def authorize_segment(
        self,
        subject: Subject,
        resource_id: UUID,
        token: DelegationToken | None,
        required: Capability = Capability.READ,
    ) -> SegmentAuthorization:
        """Validate the presented token, falling back to a full check."""
        if token is not None and token.capability >= required:
            if await self.validate_stream_token(token, subject, resource_id):
                return SegmentAuthorization(allowed=True, token=token)

        result = await self.issue_stream_token(subject, resource_id, required)
        if isinstance(result, DelegationToken):
            return SegmentAuthorization(allowed=True, token=result, fallback=True)

        logger.warning(
            "stream_terminated",
            resource_id=str(resource_id),
            subject=subject.fingerprint,
        )
        return SegmentAuthorization(allowed=False, decision=result, fallback=True)

    async def bump_generation(self, resource_id: UUID) -> int:
        """Invalidate every outstanding token for the resource."""
        async with self._uow_factory() as uow:
            generation = await uow.generations.bump(resource_id)
        logger.info("generation_bumped", resource_id=str(resource_id), generation=generation)
        return generation

    async def _current_generation(self, resource_id: UUID) -> int:
        async with self._uow_factory() as uow:
            return await uow.generations.current(resource_id)
