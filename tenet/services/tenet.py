"""Process-level facade over tenants."""
from typing import Optional
import uuid

from tenet.core.config import Settings
from tenet.core.database import Database
from tenet.core.exceptions import NotFoundError, TenantNotEmptyError
from tenet.core.logging import get_logger
from tenet.repositories import (
    ApplicationRepository,
    RoleRepository,
    StorageRepository,
    TenantRepository,
    UserRepository,
)
from tenet.schemas import Tenant, TenantCreate, TenantUpdate, User
from tenet.services.tenant_context import TenantContext


logger = get_logger(__name__)


def _child_repositories(session):
    """Child repositories in the order a cascading delete must clear them."""
    return (
        ("roles", RoleRepository(session)),
        ("applications", ApplicationRepository(session)),
        ("storages", StorageRepository(session)),
        ("users", UserRepository(session)),
    )


class Tenet:
    """Entry point: create, find, rename and delete tenants.

    Everything a tenant owns is reached through the ``TenantContext``
    returned by ``tenant()``.
    """

    def __init__(self, database: Database):
        self.database = database

    @classmethod
    def from_settings(cls, settings: Settings) -> "Tenet":
        return cls(Database(settings))

    @classmethod
    def from_url(cls, connection_string: str = "") -> "Tenet":
        """Build from a connection string; empty means the default local database."""
        return cls.from_settings(Settings(DATABASE_URL=connection_string))

    async def __aenter__(self) -> "Tenet":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self.database.dispose()

    @property
    def _stamp_updated_at(self) -> bool:
        return self.database.settings.STAMP_UPDATED_AT_ON_CREATE

    def context(self, tenant: Tenant) -> TenantContext:
        return TenantContext(self.database, tenant)

    async def tenant(self, tenant_id: uuid.UUID) -> TenantContext:
        """Aggregate for an existing tenant; NotFoundError otherwise."""
        return self.context(await self.get_tenant(tenant_id))

    async def create_tenant(self, title: str) -> Tenant:
        async with self.database.session() as session:
            row = await TenantRepository(session).create(
                TenantCreate(title=title), self._stamp_updated_at
            )
        return Tenant.from_row(row)

    async def get_tenant(self, tenant_id: uuid.UUID) -> Tenant:
        async with self.database.session() as session:
            row = await TenantRepository(session).find(tenant_id)
        return Tenant.from_row(row)

    async def get_tenant_by_id(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        async with self.database.session() as session:
            row = await TenantRepository(session).find_optional(tenant_id)
        return Tenant.from_row(row) if row is not None else None

    async def get_tenants(self) -> list[Tenant]:
        async with self.database.session() as session:
            rows = await TenantRepository(session).find_all()
        return [Tenant.from_row(row) for row in rows]

    async def get_tenant_ids(self) -> list[uuid.UUID]:
        async with self.database.session() as session:
            return await TenantRepository(session).find_ids()

    async def set_tenant_title(self, tenant_id: uuid.UUID, title: str) -> Tenant:
        async with self.database.session() as session:
            row = await TenantRepository(session).update(tenant_id, TenantUpdate(title=title))
        return Tenant.from_row(row)

    async def delete_tenant(self, tenant_id: uuid.UUID, cascade: bool = False) -> int:
        """Delete a tenant in one transaction.

        A tenant that still owns rows is rejected with TenantNotEmptyError
        unless ``cascade`` is set, in which case its roles, applications,
        storages and users go first. Returns the number of tenant rows
        deleted; 0 means there was nothing to delete.
        """
        async with self.database.transaction() as session:
            tenants = TenantRepository(session)
            if await tenants.find_optional(tenant_id) is None:
                return 0

            children = _child_repositories(session)
            counts = {name: await repo.count_by_tenant(tenant_id) for name, repo in children}
            if any(counts.values()):
                if not cascade:
                    raise TenantNotEmptyError(tenant_id, counts)
                for _, repo in children:
                    await repo.delete_by_tenant(tenant_id)

            deleted = await tenants.delete(tenant_id)

        logger.info(f"Tenant deleted (cascade={cascade})", extra={"tenant_id": tenant_id})
        return deleted

    async def find_user_by_email(self, email: str) -> User:
        async with self.database.session() as session:
            row = await UserRepository(session).find_by_email(email)
        return User.from_row(row)

    async def get_tenant_id_by_username(self, username: str) -> uuid.UUID:
        return (await self.get_tenant_by_username(username)).id

    async def get_tenant_by_username(self, username: str) -> Tenant:
        """Tenant owning the user with this email."""
        async with self.database.session() as session:
            user = await UserRepository(session).find_by_email(username)
            if user.tenant_id is None:
                raise NotFoundError(f"User {username!r} has no tenant")
            row = await TenantRepository(session).find(user.tenant_id)
        return Tenant.from_row(row)

    async def verify_password(self, username: str, password: str) -> bool:
        """Check a login; NotFoundError when no user has this email."""
        user = await self.find_user_by_email(username)
        return user.verify_password(password)
