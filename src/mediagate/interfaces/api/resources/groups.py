"""Access group API resources."""

import falcon.asgi

from mediagate.application.use_cases.group.add_member import AddGroupMemberUseCase
from mediagate.application.use_cases.group.create_group import CreateGroupUseCase
from mediagate.application.use_cases.group.remove_member import RemoveGroupMemberUseCase
from mediagate.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from mediagate.interfaces.api.resources.common import parse_uuid


class GroupsResource:
    """POST /v1/groups - create group owned by the current user."""

    def __init__(self, create_group: CreateGroupUseCase) -> None:
        self._create_group = create_group

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media()
        try:
            group = await self._create_group.execute(
                user.user_id, body.get("name") or "", slug=body.get("slug")
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except Conflict as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "id": str(group.id),
            "name": group.name,
            "slug": group.slug,
            "owner_id": group.owner_id,
            "created_at": group.created_at.isoformat(),
        }
        resp.status = falcon.HTTP_201


class GroupMembersResource:
    """POST /v1/groups/{group_id}/members - add member or change role."""

    def __init__(self, add_member: AddGroupMemberUseCase) -> None:
        self._add_member = add_member

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        group_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return
        gid = parse_uuid(group_id)
        if gid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid group ID"}
            return

        body = await req.get_media()
        try:
            member_id = body["user_id"]
            role = body["role"]
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing field: {e}"}
            return

        try:
            membership = await self._add_member.execute(user.user_id, gid, member_id, role)
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

        resp.media = {
            "group_id": str(membership.group_id),
            "user_id": membership.user_id,
            "role": str(membership.role),
        }
        resp.status = falcon.HTTP_201


class GroupMemberResource:
    """DELETE /v1/groups/{group_id}/members/{user_id} - remove member."""

    def __init__(self, remove_member: RemoveGroupMemberUseCase) -> None:
        self._remove_member = remove_member

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        group_id: str,
        user_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return
        gid = parse_uuid(group_id)
        if gid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid group ID"}
            return

        try:
            await self._remove_member.execute(user.user_id, gid, user_id)
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

        resp.status = falcon.HTTP_204
