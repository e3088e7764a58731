"""Media API resources - registration, access checks and grant-affecting edits."""

import falcon.asgi

from mediagate.application.authorization.engine import AuthorizationEngine
from mediagate.application.use_cases.resource.assign_group import AssignResourceGroupUseCase
from mediagate.application.use_cases.resource.register_resource import (
    RegisterResourceUseCase,
)
from mediagate.application.use_cases.resource.set_visibility import (
    SetResourceVisibilityUseCase,
)
from mediagate.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from mediagate.domain.value_objects import Allow, Capability, ResourceKind
from mediagate.interfaces.api.resources.common import (
    parse_uuid,
    request_context,
    request_subject,
    resource_to_dict,
)
from mediagate.interfaces.api.status import denial_response


class MediaRegistrationResource:
    """POST /v1/media - register an uploaded video or image."""

    def __init__(self, register_resource: RegisterResourceUseCase) -> None:
        self._register = register_resource

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media()
        try:
            kind = ResourceKind(body.get("kind", ""))
            slug = body["slug"]
        except (KeyError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid media: {e}"}
            return

        try:
            resource = await self._register.execute(user.user_id, kind, slug, body.get("title"))
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except Conflict as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return

        resp.media = resource_to_dict(resource)
        resp.status = falcon.HTTP_201


class MediaAccessResource:
    """GET /v1/media/{resource_id}/access?capability= - authorization decision."""

    def __init__(self, engine: AuthorizationEngine) -> None:
        self._engine = engine

    async def on_get(
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
        try:
            required = Capability(req.get_param("capability", default="read"))
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid capability"}
            return

        decision = await self._engine.check_access(
            request_subject(req), rid, required, request_context(req)
        )
        if not isinstance(decision, Allow):
            denial_response(resp, decision)
            return

        resp.media = {
            "allowed": True,
            "capability": str(decision.capability),
            "source": str(decision.source),
        }
        resp.status = falcon.HTTP_200


class MediaVisibilityResource:
    """PUT /v1/media/{resource_id}/visibility - make public or private."""

    def __init__(self, set_visibility: SetResourceVisibilityUseCase) -> None:
        self._set_visibility = set_visibility

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return
        rid = parse_uuid(resource_id)
        if rid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resource ID"}
            return

        body = await req.get_media()
        is_public = body.get("is_public")
        if not isinstance(is_public, bool):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "is_public must be a boolean"}
            return

        try:
            resource = await self._set_visibility.execute(user.user_id, rid, is_public)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Resource not found"}
            return

        resp.media = resource_to_dict(resource)
        resp.status = falcon.HTTP_200


class MediaGroupResource:
    """PUT /v1/media/{resource_id}/group - assign to a group or clear it."""

    def __init__(self, assign_group: AssignResourceGroupUseCase) -> None:
        self._assign_group = assign_group

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return
        rid = parse_uuid(resource_id)
        if rid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resource ID"}
            return

        body = await req.get_media()
        raw_group = body.get("group_id")
        group_id = parse_uuid(raw_group) if raw_group else None
        if raw_group and group_id is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid group ID"}
            return

        try:
            resource = await self._assign_group.execute(user.user_id, rid, group_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = resource_to_dict(resource)
        resp.status = falcon.HTTP_200


class MediaAuditResource:
    """GET /v1/media/{resource_id}/audit - recent access decisions, admin only."""

    def __init__(self, engine: AuthorizationEngine, unit_of_work_factory: type) -> None:
        self._engine = engine
        self._uow_factory = unit_of_work_factory

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return
        rid = parse_uuid(resource_id)
        if rid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid resource ID"}
            return

        limit = req.get_param_as_int("limit") or 50
        limit = min(max(limit, 1), 200)

        try:
            await self._engine.require(request_subject(req), rid, Capability.ADMIN)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        async with self._uow_factory() as uow:
            entries = await uow.audit.list_for_resource(rid, limit=limit)

        resp.media = {
            "items": [
                {
                    "id": str(e.id),
                    "subject": e.subject_fingerprint,
                    "capability_requested": e.capability_requested,
                    "access_granted": e.access_granted,
                    "outcome": e.outcome,
                    "source": e.source,
                    "security_event": e.is_security_event,
                    "ip_address": e.ip_address,
                    "created_at": e.created_at.isoformat(),
                }
                for e in entries
            ],
        }
        resp.status = falcon.HTTP_200
