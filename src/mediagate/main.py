"""Application entry point and composition root."""

import falcon.asgi
import structlog

from mediagate import __version__
from mediagate.application.authorization.engine import AuthorizationEngine
from mediagate.application.streaming.delegation import StreamDelegation
from mediagate.application.use_cases.access_code.create_access_code import (
    CreateAccessCodeUseCase,
)
from mediagate.application.use_cases.access_code.deactivate_access_code import (
    DeactivateAccessCodeUseCase,
)
from mediagate.application.use_cases.access_code.list_access_codes import (
    ListAccessCodesUseCase,
)
from mediagate.application.use_cases.group.add_member import AddGroupMemberUseCase
from mediagate.application.use_cases.group.create_group import CreateGroupUseCase
from mediagate.application.use_cases.group.remove_member import RemoveGroupMemberUseCase
from mediagate.application.use_cases.resource.assign_group import AssignResourceGroupUseCase
from mediagate.application.use_cases.resource.register_resource import (
    RegisterResourceUseCase,
)
from mediagate.application.use_cases.resource.set_visibility import (
    SetResourceVisibilityUseCase,
)
from mediagate.config import get_settings
from mediagate.infrastructure.auth.keycloak_provider import KeycloakProvider
from mediagate.infrastructure.persistence.postgres.connection import create_pool
from mediagate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from mediagate.infrastructure.streaming.jwt_token_codec import JWTTokenCodec
from mediagate.interfaces.api.app import create_app
from mediagate.interfaces.api.middleware.auth import AuthMiddleware
from mediagate.interfaces.api.middleware.cors import CORSMiddleware
from mediagate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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
from mediagate.logging import setup_logging

logger = structlog.get_logger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"MediaGate v{__version__}")


def create_mediagate_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        timeout=settings.database_pool_timeout,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("session_verification_disabled", reason="no keycloak client secret")

    engine = AuthorizationEngine(
        unit_of_work_factory=uow_factory,
        audit_enabled=settings.audit_enabled,
    )
    delegation = StreamDelegation(
        access_checker=engine,
        unit_of_work_factory=uow_factory,
        ttl_seconds=settings.stream_token_ttl_seconds,
    )
    codec = JWTTokenCodec(settings.stream_token_secret)

    register_resource = RegisterResourceUseCase(unit_of_work_factory=uow_factory)
    set_visibility = SetResourceVisibilityUseCase(
        unit_of_work_factory=uow_factory,
        access_checker=engine,
    )
    assign_group = AssignResourceGroupUseCase(
        unit_of_work_factory=uow_factory,
        access_checker=engine,
    )
    create_access_code = CreateAccessCodeUseCase(
        unit_of_work_factory=uow_factory,
        access_checker=engine,
    )
    deactivate_access_code = DeactivateAccessCodeUseCase(unit_of_work_factory=uow_factory)
    list_access_codes = ListAccessCodesUseCase(unit_of_work_factory=uow_factory)
    create_group = CreateGroupUseCase(unit_of_work_factory=uow_factory)
    add_member = AddGroupMemberUseCase(unit_of_work_factory=uow_factory)
    remove_member = RemoveGroupMemberUseCase(unit_of_work_factory=uow_factory)

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    app = create_app(
        health_resource=HealthResource(pool),
        media_registration_resource=MediaRegistrationResource(register_resource),
        media_access_resource=MediaAccessResource(engine),
        media_audit_resource=MediaAuditResource(engine, uow_factory),
        media_visibility_resource=MediaVisibilityResource(set_visibility),
        media_group_resource=MediaGroupResource(assign_group),
        stream_token_resource=StreamTokenResource(delegation, codec),
        stream_segment_resource=StreamSegmentResource(delegation, codec),
        access_codes_resource=AccessCodesResource(create_access_code, list_access_codes),
        access_code_resource=AccessCodeResource(deactivate_access_code),
        access_code_scope_resource=AccessCodeScopeResource(engine),
        groups_resource=GroupsResource(create_group),
        group_members_resource=GroupMembersResource(add_member),
        group_member_resource=GroupMemberResource(remove_member),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )
    logger.info("app_created", version=__version__, environment=settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_mediagate_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
