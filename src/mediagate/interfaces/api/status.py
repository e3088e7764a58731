"""Mapping of decisions to HTTP status codes."""

import falcon

from mediagate.domain.value_objects import Decision, Deny, DenyReason, Indeterminate

DENY_STATUS: dict[DenyReason, str] = {
    DenyReason.NO_CREDENTIALS: falcon.HTTP_403,
    DenyReason.INSUFFICIENT_ROLE: falcon.HTTP_403,
    DenyReason.INSUFFICIENT_CAPABILITY: falcon.HTTP_403,
    # Scope mismatch must not reveal that the resource exists.
    DenyReason.CODE_SCOPE_MISMATCH: falcon.HTTP_404,
    DenyReason.CODE_NOT_FOUND: falcon.HTTP_404,
    DenyReason.CODE_REVOKED: falcon.HTTP_404,
    DenyReason.CODE_EXPIRED: falcon.HTTP_410,
    DenyReason.RESOURCE_NOT_FOUND: falcon.HTTP_404,
}


def status_for_reason(reason: DenyReason) -> str:
    return DENY_STATUS.get(reason, falcon.HTTP_403)


def denial_response(resp, decision: Decision) -> None:
    """Set status and body for a non-Allow decision."""
    if isinstance(decision, Indeterminate):
        resp.status = falcon.HTTP_503
        resp.media = {"error": "Authorization unavailable"}
        return
    if isinstance(decision, Deny):
        resp.status = status_for_reason(decision.reason)
        if resp.status == falcon.HTTP_404:
            resp.media = {"error": "Not found"}
        elif resp.status == falcon.HTTP_410:
            resp.media = {"error": "Access code expired"}
        else:
            resp.media = {"error": "Access denied", "reason": str(decision.reason)}
        return
    raise TypeError(f"Not a denial: {decision!r}")
