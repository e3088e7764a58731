"""Shared helpers for API resources."""

from datetime import UTC, datetime
from uuid import UUID

import falcon.asgi

from mediagate.application.authorization.engine import RequestContext
from mediagate.domain.entities import AccessCode, Resource
from mediagate.domain.value_objects import Anonymous, Subject


def parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except (ValueError, AttributeError, TypeError):
        return None


def parse_datetime(value: str | None) -> datetime | None:
    """ISO 8601 string to aware datetime; naive values are taken as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def request_subject(req: falcon.asgi.Request) -> Subject:
    return getattr(req.context, "subject", None) or Anonymous()


def request_context(req: falcon.asgi.Request) -> RequestContext:
    return RequestContext(ip_address=req.remote_addr, user_agent=req.user_agent)


def resource_to_dict(resource: Resource) -> dict:
    return {
        "id": str(resource.id),
        "kind": str(resource.kind),
        "slug": resource.slug,
        "title": resource.title,
        "group_id": str(resource.group_id) if resource.group_id else None,
        "is_public": resource.is_public,
        "created_at": resource.created_at.isoformat(),
    }


def access_code_to_dict(access_code: AccessCode) -> dict:
    return {
        "code": access_code.code,
        "scope": str(access_code.scope_kind),
        "scope_id": str(access_code.scope_id),
        "description": access_code.description,
        "created_at": access_code.created_at.isoformat(),
        "expires_at": access_code.expires_at.isoformat() if access_code.expires_at else None,
        "is_active": access_code.is_active,
    }
