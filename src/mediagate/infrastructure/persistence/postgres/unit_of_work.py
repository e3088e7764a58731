"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from mediagate.domain.exceptions import StorageUnavailable
from mediagate.infrastructure.persistence.postgres.access_code_repository import (
    PostgresAccessCodeRepository,
)
from mediagate.infrastructure.persistence.postgres.audit_repository import (
    PostgresAuditRepository,
)
from mediagate.infrastructure.persistence.postgres.generation_repository import (
    PostgresGenerationRepository,
)
from mediagate.infrastructure.persistence.postgres.group_repository import (
    PostgresGroupRepository,
    PostgresMembershipRepository,
)
from mediagate.infrastructure.persistence.postgres.resource_repository import (
    PostgresResourceRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._resources = PostgresResourceRepository(self._conn)
        self._groups = PostgresGroupRepository(self._conn)
        self._memberships = PostgresMembershipRepository(self._conn)
        self._access_codes = PostgresAccessCodeRepository(self._conn)
        self._generations = PostgresGenerationRepository(self._conn)
        self._audit = PostgresAuditRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def resources(self) -> PostgresResourceRepository:
        return self._resources

    @property
    def groups(self) -> PostgresGroupRepository:
        return self._groups

    @property
    def memberships(self) -> PostgresMembershipRepository:
        return self._memberships

    @property
    def access_codes(self) -> PostgresAccessCodeRepository:
        return self._access_codes

    @property
    def generations(self) -> PostgresGenerationRepository:
        return self._generations

    @property
    def audit(self) -> PostgresAuditRepository:
        return self._audit

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Connection-level failures (including pool timeouts) surface as
    StorageUnavailable.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            uow = PostgresUnitOfWork(pool)
            async with uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except (psycopg.OperationalError, psycopg.InterfaceError) as e:
            raise StorageUnavailable(str(e)) from e

    return factory
