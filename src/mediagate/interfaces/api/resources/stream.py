"""Streaming API resources - token issue and per-segment authorization.

Segment requests are meant for a proxy auth subrequest: 204 lets the proxy
serve the segment, anything else terminates the stream.
"""

from datetime import UTC

import falcon.asgi
import structlog

from mediagate.application.streaming.delegation import StreamDelegation
from mediagate.domain.value_objects import DelegationToken
from mediagate.infrastructure.streaming.jwt_token_codec import JWTTokenCodec
from mediagate.interfaces.api.resources.common import parse_uuid, request_subject
from mediagate.interfaces.api.status import denial_response

logger = structlog.get_logger(__name__)

STREAM_TOKEN_PARAM = "st"
STREAM_TOKEN_HEADER = "X-Stream-Token"


class StreamTokenResource:
    """POST /v1/media/{resource_id}/stream - full check, then a delegation token."""

    def __init__(self, delegation: StreamDelegation, codec: JWTTokenCodec) -> None:
        self._delegation = delegation
        self._codec = codec

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        rid = parse_uuid(resource_id)
        if rid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resource ID"}
            return

        result = await self._delegation.issue_stream_token(request_subject(req), rid)
        if not isinstance(result, DelegationToken):
            denial_response(resp, result)
            return

        resp.media = {
            "token": self._codec.encode(result),
            "resource_id": str(result.resource_id),
            "capability": str(result.capability),
            "expires_at": result.expires_at.astimezone(UTC).isoformat(),
        }
        resp.status = falcon.HTTP_201


class StreamSegmentResource:
    """GET /v1/media/{resource_id}/stream/{segment} - validate a segment fetch."""

    def __init__(self, delegation: StreamDelegation, codec: JWTTokenCodec) -> None:
        self._delegation = delegation
        self._codec = codec

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
        segment: str,
    ) -> None:
        rid = parse_uuid(resource_id)
        if rid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resource ID"}
            return

        raw = req.get_param(STREAM_TOKEN_PARAM) or req.get_header(STREAM_TOKEN_HEADER)
        token = self._codec.decode(raw) if raw else None
        if raw and token is None:
            logger.info("stream_token_rejected", resource_id=resource_id, segment=segment)

        result = await self._delegation.authorize_segment(request_subject(req), rid, token)
        if result.terminated:
            denial_response(resp, result.decision)
            return

        if result.fallback:
            resp.set_header(STREAM_TOKEN_HEADER, self._codec.encode(result.token))
        resp.status = falcon.HTTP_204
