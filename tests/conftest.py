"""Pytest fixtures for MediaGate tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from mediagate.application.authorization.engine import AuthorizationEngine
from mediagate.application.streaming.delegation import StreamDelegation
from mediagate.domain.entities import (
    AccessCode,
    AccessGroup,
    AuditEntry,
    GroupMembership,
    Resource,
)
from mediagate.domain.exceptions import StorageUnavailable
from mediagate.domain.value_objects import ResourceKind, Role, ScopeKind

EPOCH = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


# --- In-memory store shared by every UoW of one test ---


@dataclass
class InMemoryStore:
    resources: dict[UUID, Resource] = field(default_factory=dict)
    groups: dict[UUID, AccessGroup] = field(default_factory=dict)
    memberships: dict[tuple[UUID, str], GroupMembership] = field(default_factory=dict)
    access_codes: dict[str, AccessCode] = field(default_factory=dict)
    generations: dict[UUID, int] = field(default_factory=dict)
    audit: list[AuditEntry] = field(default_factory=list)


# --- Fake repositories ---


class FakeResourceRepository:
    """In-memory resource repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, resource_id: UUID) -> Resource | None:
        return self._store.resources.get(resource_id)

    async def get_by_slug(self, kind: ResourceKind, slug: str) -> Resource | None:
        for r in self._store.resources.values():
            if r.kind == kind and r.slug == slug:
                return r
        return None

    async def list_by_group(self, group_id: UUID) -> list[Resource]:
        items = [r for r in self._store.resources.values() if r.group_id == group_id]
        return sorted(items, key=lambda r: (r.created_at, str(r.id)))

    async def create(self, resource: Resource) -> Resource:
        self._store.resources[resource.id] = resource
        return resource

    async def update(self, resource: Resource) -> None:
        self._store.resources[resource.id] = resource


class FakeGroupRepository:
    """In-memory access group repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, group_id: UUID) -> AccessGroup | None:
        return self._store.groups.get(group_id)

    async def get_by_slug(self, slug: str) -> AccessGroup | None:
        for g in self._store.groups.values():
            if g.slug == slug:
                return g
        return None

    async def create(self, group: AccessGroup) -> AccessGroup:
        self._store.groups[group.id] = group
        return group


class FakeMembershipRepository:
    """In-memory group membership repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, group_id: UUID, user_id: str) -> GroupMembership | None:
        return self._store.memberships.get((group_id, user_id))

    async def list_roles(self, group_id: UUID, user_id: str) -> list[Role]:
        m = self._store.memberships.get((group_id, user_id))
        return [m.role] if m else []

    async def upsert(self, membership: GroupMembership) -> GroupMembership:
        self._store.memberships[(membership.group_id, membership.user_id)] = membership
        return membership

    async def delete(self, group_id: UUID, user_id: str) -> None:
        self._store.memberships.pop((group_id, user_id), None)


class FakeAccessCodeRepository:
    """In-memory access code repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_code(self, code: str) -> AccessCode | None:
        return self._store.access_codes.get(code)

    async def list_by_creator(self, created_by: str) -> list[AccessCode]:
        return [c for c in self._store.access_codes.values() if c.created_by == created_by]

    async def create(self, access_code: AccessCode) -> AccessCode:
        self._store.access_codes[access_code.code] = access_code
        return access_code

    async def set_active(self, code: str, is_active: bool) -> None:
        self._store.access_codes[code].is_active = is_active


class FakeGenerationRepository:
    """In-memory revocation generation counters."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def current(self, resource_id: UUID) -> int:
        return self._store.generations.get(resource_id, 0)

    async def bump(self, resource_id: UUID) -> int:
        self._store.generations[resource_id] = self._store.generations.get(resource_id, 0) + 1
        return self._store.generations[resource_id]

    async def bump_group(self, group_id: UUID) -> int:
        bumped = 0
        for r in list(self._store.resources.values()):
            if r.group_id == group_id:
                await self.bump(r.id)
                bumped += 1
        return bumped


class FakeAuditRepository:
    """In-memory audit log."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def record(self, entry: AuditEntry) -> None:
        self._store.audit.append(entry)

    async def list_for_resource(self, resource_id: UUID, limit: int = 50) -> list[AuditEntry]:
        items = [e for e in self._store.audit if e.resource_id == resource_id]
        return sorted(items, key=lambda e: e.created_at, reverse=True)[:limit]

class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()
        self.resources = FakeResourceRepository(self.store)
        self.groups = FakeGroupRepository(self.store)
        self.memberships = FakeMembershipRepository(self.store)
        self.access_codes = FakeAccessCodeRepository(self.store)
        self.generations = FakeGenerationRepository(self.store)
        self.audit = FakeAuditRepository(self.store)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: InMemoryStore):
    """Factory yielding a FakeUnitOfWork over the given store per call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield FakeUnitOfWork(store)

    return _factory


class UnavailableUnitOfWork:
    """UoW whose store cannot be reached; use the class itself as the factory."""

    async def __aenter__(self) -> FakeUnitOfWork:
        raise StorageUnavailable("connection refused")

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        return None


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime = EPOCH) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now = self.now + timedelta(seconds=seconds)


# --- Builders ---


def add_resource(
    store: InMemoryStore,
    owner_id: str = "owner-1",
    group_id: UUID | None = None,
    is_public: bool = False,
    slug: str | None = None,
    kind: ResourceKind = ResourceKind.VIDEO,
    created_at: datetime = EPOCH,
) -> Resource:
    resource_id = uuid4()
    slug = slug or f"media-{resource_id.hex[:8]}"
    resource = Resource(
        id=resource_id,
        kind=kind,
        slug=slug,
        title=slug,
        owner_id=owner_id,
        created_at=created_at,
        updated_at=created_at,
        group_id=group_id,
        is_public=is_public,
    )
    store.resources[resource.id] = resource
    return resource


def add_group(store: InMemoryStore, owner_id: str = "owner-1", slug: str = "family") -> AccessGroup:
    group = AccessGroup(id=uuid4(), name=slug.title(), slug=slug, owner_id=owner_id, created_at=EPOCH)
    store.groups[group.id] = group
    store.memberships[(group.id, owner_id)] = GroupMembership(
        group_id=group.id, user_id=owner_id, role=Role.ADMIN, created_at=EPOCH
    )
    return group


def add_member(store: InMemoryStore, group: AccessGroup, user_id: str, role: Role) -> GroupMembership:
    membership = GroupMembership(group_id=group.id, user_id=user_id, role=role, created_at=EPOCH)
    store.memberships[(group.id, user_id)] = membership
    return membership


def add_code(
    store: InMemoryStore,
    code: str,
    scope_id: UUID,
    scope_kind: ScopeKind = ScopeKind.RESOURCE,
    created_by: str = "owner-1",
    expires_at: datetime | None = None,
    is_active: bool = True,
) -> AccessCode:
    access_code = AccessCode(
        code=code,
        scope_kind=scope_kind,
        scope_id=scope_id,
        created_by=created_by,
        created_at=EPOCH - timedelta(days=1),
        expires_at=expires_at,
        is_active=is_active,
    )
    store.access_codes[code] = access_code
    return access_code


# --- Fixtures ---


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory store for each test."""
    return InMemoryStore()


@pytest.fixture
def uow_factory(store: InMemoryStore):
    """Factory returning async context manager with FakeUnitOfWork over the store."""
    return make_uow_factory(store)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(uow_factory, clock: FakeClock) -> AuthorizationEngine:
    return AuthorizationEngine(unit_of_work_factory=uow_factory, clock=clock)


@pytest.fixture
def delegation(engine: AuthorizationEngine, uow_factory, clock: FakeClock) -> StreamDelegation:
    return StreamDelegation(
        access_checker=engine,
        unit_of_work_factory=uow_factory,
        ttl_seconds=1800,
        clock=clock,
    )
