"""Access code API resources."""

import falcon.asgi

from mediagate.application.authorization.engine import AuthorizationEngine
from mediagate.application.dto.access_code_dto import AccessCodeCreateInput
from mediagate.application.use_cases.access_code.create_access_code import (
    CreateAccessCodeUseCase,
)
from mediagate.application.use_cases.access_code.deactivate_access_code import (
    DeactivateAccessCodeUseCase,
)
from mediagate.application.use_cases.access_code.list_access_codes import (
    ListAccessCodesUseCase,
)
from mediagate.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from mediagate.domain.value_objects import Deny, ScopeKind
from mediagate.interfaces.api.resources.common import (
    access_code_to_dict,
    parse_datetime,
    parse_uuid,
    resource_to_dict,
)
from mediagate.interfaces.api.status import denial_response


class AccessCodesResource:
    """GET/POST /v1/access-codes - list own codes and create new ones."""

    def __init__(
        self,
        create_access_code: CreateAccessCodeUseCase,
        list_access_codes: ListAccessCodesUseCase,
    ) -> None:
        self._create = create_access_code
        self._list = list_access_codes

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List codes created by the current user."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        codes = await self._list.execute(user.user_id)
        resp.media = {"items": [access_code_to_dict(c) for c in codes]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a code scoped to one resource or one group."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media()
        try:
            scope_kind = ScopeKind(body["scope"])
            scope_id = parse_uuid(body["scope_id"])
            if scope_id is None:
                raise ValueError("invalid scope_id")
            input_data = AccessCodeCreateInput(
                scope_kind=scope_kind,
                scope_id=scope_id,
                code=body.get("code"),
                description=body.get("description"),
                expires_at=parse_datetime(body.get("expires_at")),
            )
        except (KeyError, ValueError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid access code: {e}"}
            return

        try:
            access_code = await self._create.execute(user.user_id, input_data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except Conflict as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return

        resp.media = access_code_to_dict(access_code)
        resp.status = falcon.HTTP_201


class AccessCodeResource:
    """DELETE /v1/access-codes/{code} - deactivate a code."""

    def __init__(self, deactivate_access_code: DeactivateAccessCodeUseCase) -> None:
        self._deactivate = deactivate_access_code

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        code: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            await self._deactivate.execute(user.user_id, code)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        resp.status = falcon.HTTP_204


class AccessCodeScopeResource:
    """GET /v1/access-codes/{code}/resources - what a code currently unlocks.

    Public: the code itself is the credential.
    """

    def __init__(self, engine: AuthorizationEngine) -> None:
        self._engine = engine

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        code: str,
    ) -> None:
        listing = await self._engine.resolve_code_scope(code)
        if not listing.valid:
            denial_response(resp, Deny(reason=listing.reason))
            return

        resp.media = {"items": [resource_to_dict(r) for r in listing.resources]}
        resp.status = falcon.HTTP_200
