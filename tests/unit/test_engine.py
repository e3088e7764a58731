"""Unit tests for the authorization decision engine."""

from datetime import timedelta
from uuid import uuid4

import pytest

from mediagate.application.authorization.engine import AuthorizationEngine, RequestContext
from mediagate.domain.exceptions import PermissionDenied, StorageUnavailable
from mediagate.domain.value_objects import (
    Allow,
    Anonymous,
    AuthenticatedUser,
    Capability,
    CodeBearer,
    Deny,
    DenyReason,
    GrantSource,
    Indeterminate,
    ResourceKind,
    Role,
    ScopeKind,
)

from tests.conftest import (
    EPOCH,
    UnavailableUnitOfWork,
    add_code,
    add_group,
    add_member,
    add_resource,
)


@pytest.mark.asyncio
async def test_owner_has_admin(store, engine) -> None:
    resource = add_resource(store, owner_id="owner-1")
    decision = await engine.check_access(AuthenticatedUser("owner-1"), resource.id, Capability.ADMIN)
    assert decision == Allow(capability=Capability.ADMIN, source=GrantSource.OWNERSHIP)


@pytest.mark.asyncio
async def test_unknown_resource(engine) -> None:
    decision = await engine.check_access(AuthenticatedUser("owner-1"), uuid4(), Capability.READ)
    assert decision == Deny(reason=DenyReason.RESOURCE_NOT_FOUND, required=Capability.READ)


@pytest.mark.asyncio
async def test_group_code_scenario(store, engine) -> None:
    """Code abc123 on a group with a video and an image covers both for read only."""
    group = add_group(store, slug="group-7")
    intro = add_resource(store, group_id=group.id, slug="intro", kind=ResourceKind.VIDEO)
    cover = add_resource(
        store,
        group_id=group.id,
        slug="cover",
        kind=ResourceKind.IMAGE,
        created_at=EPOCH + timedelta(minutes=1),
    )
    outside = add_resource(store, slug="elsewhere")
    add_code(store, "abc123", group.id, ScopeKind.GROUP, expires_at=EPOCH + timedelta(days=7))
    bearer = CodeBearer("abc123")

    for resource in (intro, cover):
        decision = await engine.check_access(bearer, resource.id, Capability.READ)
        assert decision == Allow(capability=Capability.READ, source=GrantSource.ACCESS_CODE)

    download = await engine.check_access(bearer, intro.id, Capability.DOWNLOAD)
    assert download.reason == DenyReason.INSUFFICIENT_CAPABILITY

    mismatch = await engine.check_access(bearer, outside.id, Capability.READ)
    assert mismatch.reason == DenyReason.CODE_SCOPE_MISMATCH

    listed = await engine.list_resources_for_code_scope("abc123")
    assert [r.slug for r in listed] == ["intro", "cover"]


@pytest.mark.asyncio
async def test_code_expiry_applies_immediately(store, engine, clock) -> None:
    group = add_group(store)
    resource = add_resource(store, group_id=group.id)
    add_code(store, "abc123", group.id, ScopeKind.GROUP, expires_at=EPOCH + timedelta(hours=1))

    clock.now = EPOCH + timedelta(hours=1)
    assert (await engine.check_access(CodeBearer("abc123"), resource.id, Capability.READ)).allowed

    clock.advance(1)
    decision = await engine.check_access(CodeBearer("abc123"), resource.id, Capability.READ)
    assert decision.reason == DenyReason.CODE_EXPIRED


@pytest.mark.asyncio
async def test_code_revocation_applies_immediately(store, engine) -> None:
    group = add_group(store)
    resource = add_resource(store, group_id=group.id)
    code = add_code(store, "abc123", group.id, ScopeKind.GROUP)
    assert (await engine.check_access(CodeBearer("abc123"), resource.id, Capability.READ)).allowed

    code.is_active = False
    decision = await engine.check_access(CodeBearer("abc123"), resource.id, Capability.READ)
    assert decision.reason == DenyReason.CODE_REVOKED


@pytest.mark.asyncio
async def test_unknown_code(store, engine) -> None:
    resource = add_resource(store)
    decision = await engine.check_access(CodeBearer("nope"), resource.id, Capability.READ)
    assert decision.reason == DenyReason.CODE_NOT_FOUND


@pytest.mark.asyncio
async def test_public_resource_scenario(store, engine) -> None:
    """Public demo video: anyone reads, nobody anonymous downloads."""
    demo = add_resource(store, slug="demo", is_public=True)
    read = await engine.check_access(Anonymous(), demo.id, Capability.READ)
    assert read == Allow(capability=Capability.READ, source=GrantSource.PUBLIC)

    download = await engine.check_access(Anonymous(), demo.id, Capability.DOWNLOAD)
    assert download.reason == DenyReason.INSUFFICIENT_CAPABILITY


@pytest.mark.asyncio
async def test_anonymous_private_resource(store, engine) -> None:
    resource = add_resource(store)
    decision = await engine.check_access(Anonymous(), resource.id, Capability.READ)
    assert decision.reason == DenyReason.NO_CREDENTIALS


@pytest.mark.asyncio
async def test_roles_are_monotonic(store, engine) -> None:
    group = add_group(store)
    resource = add_resource(store, group_id=group.id)
    user = AuthenticatedUser("member")
    roles = [Role.VIEWER, Role.CONTRIBUTOR, Role.EDITOR, Role.ADMIN]

    previous: set[Capability] = set()
    for role in roles:
        add_member(store, group, "member", role)
        allowed = {
            c for c in Capability if (await engine.check_access(user, resource.id, c)).allowed
        }
        assert previous <= allowed
        previous = allowed
    assert previous == set(Capability)

    del store.memberships[(group.id, "member")]
    decision = await engine.check_access(user, resource.id, Capability.READ)
    assert not decision.allowed


@pytest.mark.asyncio
async def test_insufficient_role(store, engine) -> None:
    group = add_group(store)
    resource = add_resource(store, group_id=group.id)
    add_member(store, group, "member", Role.VIEWER)
    decision = await engine.check_access(AuthenticatedUser("member"), resource.id, Capability.EDIT)
    assert decision.reason == DenyReason.INSUFFICIENT_ROLE


@pytest.mark.asyncio
async def test_storage_unavailable_is_indeterminate() -> None:
    engine = AuthorizationEngine(unit_of_work_factory=UnavailableUnitOfWork)
    decision = await engine.check_access(Anonymous(), uuid4(), Capability.READ)
    assert isinstance(decision, Indeterminate)
    assert not decision.allowed


@pytest.mark.asyncio
async def test_require(store, engine) -> None:
    resource = add_resource(store, owner_id="owner-1")
    allow = await engine.require(AuthenticatedUser("owner-1"), resource.id, Capability.EDIT)
    assert allow.capability == Capability.ADMIN

    with pytest.raises(PermissionDenied, match="edit"):
        await engine.require(AuthenticatedUser("someone"), resource.id, Capability.EDIT)

    unavailable = AuthorizationEngine(unit_of_work_factory=UnavailableUnitOfWork)
    with pytest.raises(StorageUnavailable):
        await unavailable.require(AuthenticatedUser("owner-1"), resource.id, Capability.READ)


@pytest.mark.asyncio
async def test_effective_capability(store, engine) -> None:
    group = add_group(store)
    resource = add_resource(store, group_id=group.id)
    add_member(store, group, "member", Role.CONTRIBUTOR)
    assert await engine.effective_capability(AuthenticatedUser("member"), resource.id) == Capability.DOWNLOAD
    assert await engine.effective_capability(Anonymous(), resource.id) is None


@pytest.mark.asyncio
async def test_batch_check_access(store, engine) -> None:
    mine = add_resource(store, owner_id="owner-1")
    theirs = add_resource(store, owner_id="owner-2")
    decisions = await engine.batch_check_access(
        AuthenticatedUser("owner-1"), [mine.id, theirs.id], Capability.READ
    )
    assert decisions[mine.id].allowed
    assert not decisions[theirs.id].allowed


@pytest.mark.asyncio
async def test_decisions_are_audited(store, engine) -> None:
    resource = add_resource(store)
    context = RequestContext(ip_address="10.0.0.1", user_agent="pytest")
    await engine.check_access(AuthenticatedUser("owner-1"), resource.id, Capability.READ, context)
    await engine.check_access(CodeBearer("secret-code"), resource.id, Capability.READ)

    granted, denied = store.audit
    assert granted.access_granted and granted.source == "ownership"
    assert granted.user_id == "owner-1"
    assert granted.ip_address == "10.0.0.1"
    assert not denied.access_granted
    assert denied.outcome == "code_not_found"
    assert denied.is_security_event
    assert "secret-code" not in denied.subject_fingerprint


@pytest.mark.asyncio
async def test_audit_can_be_disabled(store, uow_factory) -> None:
    engine = AuthorizationEngine(unit_of_work_factory=uow_factory, audit_enabled=False)
    resource = add_resource(store)
    await engine.check_access(Anonymous(), resource.id, Capability.READ)
    assert store.audit == []


@pytest.mark.asyncio
async def test_code_scope_listing_is_stable(store, engine) -> None:
    group = add_group(store)
    for i in range(3):
        add_resource(store, group_id=group.id, created_at=EPOCH + timedelta(seconds=3 - i))
    add_code(store, "abc123", group.id, ScopeKind.GROUP)

    first = await engine.list_resources_for_code_scope("abc123")
    second = await engine.list_resources_for_code_scope("abc123")
    assert first == second
    assert [r.created_at for r in first] == sorted(r.created_at for r in first)


@pytest.mark.asyncio
async def test_code_scope_listing_reasons(store, engine, clock) -> None:
    group = add_group(store)
    add_code(store, "empty", group.id, ScopeKind.GROUP)
    add_code(store, "old", group.id, ScopeKind.GROUP, expires_at=EPOCH - timedelta(days=1))
    add_code(store, "off", group.id, ScopeKind.GROUP, is_active=False)

    empty = await engine.resolve_code_scope("empty")
    assert empty.valid and empty.resources == []
    assert (await engine.resolve_code_scope("old")).reason == DenyReason.CODE_EXPIRED
    assert (await engine.resolve_code_scope("off")).reason == DenyReason.CODE_REVOKED
    assert (await engine.resolve_code_scope("missing")).reason == DenyReason.CODE_NOT_FOUND
    assert await engine.list_resources_for_code_scope("old") == []


@pytest.mark.asyncio
async def test_resource_code_listing(store, engine) -> None:
    resource = add_resource(store)
    add_code(store, "single", resource.id)
    assert await engine.list_resources_for_code_scope("single") == [resource]
