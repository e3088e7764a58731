"""Fixtures for API tests."""

from datetime import UTC, datetime

import pytest
from falcon.testing import TestClient

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
from mediagate.infrastructure.streaming.jwt_token_codec import JWTTokenCodec
from mediagate.interfaces.api.app import create_app
from mediagate.interfaces.api.middleware.auth import AuthMiddleware
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

from tests.conftest import FakeClock

STREAM_SECRET = "api-test-secret-with-32-bytes-min"


class FakeSessionVerifier:
    """Treats the bearer value as a verified user id unless it is 'expired'."""

    def verify(self, session_handle: str) -> str | None:
        return None if session_handle == "expired" else session_handle


def auth(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture
def clock() -> FakeClock:
    """Wall clock: stream tokens go through real JWT expiry checks."""
    return FakeClock(datetime.now(UTC))


@pytest.fixture
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(STREAM_SECRET)


@pytest.fixture
def app(uow_factory, engine, delegation, codec):
    """Falcon ASGI app wired to in-memory fakes."""
    return create_app(
        health_resource=HealthResource(),
        media_registration_resource=MediaRegistrationResource(
            RegisterResourceUseCase(unit_of_work_factory=uow_factory)
        ),
        media_access_resource=MediaAccessResource(engine),
        media_audit_resource=MediaAuditResource(engine, uow_factory),
        media_visibility_resource=MediaVisibilityResource(
            SetResourceVisibilityUseCase(unit_of_work_factory=uow_factory, access_checker=engine)
        ),
        media_group_resource=MediaGroupResource(
            AssignResourceGroupUseCase(unit_of_work_factory=uow_factory, access_checker=engine)
        ),
        stream_token_resource=StreamTokenResource(delegation, codec),
        stream_segment_resource=StreamSegmentResource(delegation, codec),
        access_codes_resource=AccessCodesResource(
            CreateAccessCodeUseCase(unit_of_work_factory=uow_factory, access_checker=engine),
            ListAccessCodesUseCase(unit_of_work_factory=uow_factory),
        ),
        access_code_resource=AccessCodeResource(
            DeactivateAccessCodeUseCase(unit_of_work_factory=uow_factory)
        ),
        access_code_scope_resource=AccessCodeScopeResource(engine),
        groups_resource=GroupsResource(CreateGroupUseCase(unit_of_work_factory=uow_factory)),
        group_members_resource=GroupMembersResource(
            AddGroupMemberUseCase(unit_of_work_factory=uow_factory)
        ),
        group_member_resource=GroupMemberResource(
            RemoveGroupMemberUseCase(unit_of_work_factory=uow_factory)
        ),
        middleware=[AuthMiddleware(FakeSessionVerifier())],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
