"""Falcon ASGI application."""

import falcon
import falcon.asgi
import structlog
from falcon.asgi import App

from mediagate.domain.exceptions import StorageUnavailable
from mediagate.interfaces.api.resources.access_codes import (
    AccessCodeResource,
    AccessCodeScopeResource,
    AccessCodesResource,
)
from mediagate.interfaces.api.resources.groups import (
    GroupMemberResource,
    GroupMembersResource,
    GroupsResource,
)
from mediagate.interfaces.api.resources.health import HealthResource
from mediagate.interfaces.api.resources.media import (
    MediaAccessResource,
    MediaAuditResource,
    MediaGroupResource,
    MediaRegistrationResource,
    MediaVisibilityResource,
)
from mediagate.interfaces.api.resources.stream import (
    StreamSegmentResource,
    StreamTokenResource,
)

logger = structlog.get_logger(__name__)


async def handle_storage_unavailable(req, resp, ex, params) -> None:
    logger.error("storage_unavailable", path=req.path, error=str(ex))
    resp.status = falcon.HTTP_503
    resp.media = {"error": "Service unavailable"}


async def handle_unexpected(req, resp, ex, params) -> None:
    logger.exception("unhandled_error", path=req.path, method=req.method)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    health_resource: HealthResource,
    media_registration_resource: MediaRegistrationResource,
    media_access_resource: MediaAccessResource,
    media_audit_resource: MediaAuditResource,
    media_visibility_resource: MediaVisibilityResource,
    media_group_resource: MediaGroupResource,
    stream_token_resource: StreamTokenResource,
    stream_segment_resource: StreamSegmentResource,
    access_codes_resource: AccessCodesResource,
    access_code_resource: AccessCodeResource,
    access_code_scope_resource: AccessCodeScopeResource,
    groups_resource: GroupsResource,
    group_members_resource: GroupMembersResource,
    group_member_resource: GroupMemberResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])

    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(StorageUnavailable, handle_storage_unavailable)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/media", media_registration_resource)
    app.add_route("/v1/media/{resource_id}/access", media_access_resource)
    app.add_route("/v1/media/{resource_id}/audit", media_audit_resource)
    app.add_route("/v1/media/{resource_id}/visibility", media_visibility_resource)
    app.add_route("/v1/media/{resource_id}/group", media_group_resource)
    app.add_route("/v1/media/{resource_id}/stream", stream_token_resource)
    app.add_route("/v1/media/{resource_id}/stream/{segment}", stream_segment_resource)
    app.add_route("/v1/access-codes", access_codes_resource)
    app.add_route("/v1/access-codes/{code}", access_code_resource)
    app.add_route("/v1/access-codes/{code}/resources", access_code_scope_resource)
    app.add_route("/v1/groups", groups_resource)
    app.add_route("/v1/groups/{group_id}/members", group_members_resource)
    app.add_route("/v1/groups/{group_id}/members/{user_id}", group_member_resource)
    return app
