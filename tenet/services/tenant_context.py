"""Tenant aggregate: the entry point for everything a tenant owns."""
from typing import Optional
import uuid

from tenet.core.database import Database
from tenet.core.exceptions import ConflictError, NotFoundError
from tenet.core.logging import get_logger
from tenet.repositories import (
    ApplicationRepository,
    RoleRepository,
    StorageRepository,
    UserRepository,
)
from tenet.schemas import (
    Application,
    ApplicationCreate,
    ApplicationUpdate,
    Role,
    RoleCreate,
    RoleUpdate,
    Storage,
    StorageCreate,
    StorageUpdate,
    Tenant,
    User,
    UserCreate,
    UserUpdate,
)


logger = get_logger(__name__)


class TenantContext:
    """Operations on the users, applications, storages and roles of one tenant.

    Holds no state besides the tenant it is bound to. Every lookup is scoped
    by both the tenant id and the entity id, and every create stamps the
    tenant id into the message before it reaches the repository.
    """

    def __init__(self, database: Database, tenant: Tenant):
        self.database = database
        self.tenant = tenant

    @property
    def id(self) -> uuid.UUID:
        return self.tenant.id

    @property
    def title(self) -> str:
        return self.tenant.title

    @property
    def _stamp_updated_at(self) -> bool:
        return self.database.settings.STAMP_UPDATED_AT_ON_CREATE

    def __repr__(self) -> str:
        return f"<TenantContext id={self.id} title={self.title!r}>"

    def _bind(self, message):
        """Copy of ``message`` owned by this tenant."""
        if message.tenant_id is not None and message.tenant_id != self.id:
            raise ConflictError(
                f"{type(message).__name__} is bound to tenant {message.tenant_id}, not {self.id}"
            )
        return message.model_copy(update={"tenant_id": self.id})

    # Users

    async def get_users(self) -> list[User]:
        async with self.database.session() as session:
            rows = await UserRepository(session).find_by_tenant(self.id)
        return [User.from_row(row) for row in rows]

    async def get_user_ids(self) -> list[uuid.UUID]:
        return [user.id for user in await self.get_users()]

    async def add_user(self, user: UserCreate) -> User:
        message = self._bind(user)
        async with self.database.session() as session:
            row = await UserRepository(session).create(message, self._stamp_updated_at)
        return User.from_row(row)

    async def get_user_by_id(self, user_id: uuid.UUID) -> User:
        async with self.database.session() as session:
            row = await UserRepository(session).find(self.id, user_id)
        return User.from_row(row)

    async def get_user_by_username(self, username: str) -> User:
        async with self.database.session() as session:
            row = await UserRepository(session).find_by_tenant_and_email(self.id, username)
        return User.from_row(row)

    async def update_user(self, user_id: uuid.UUID, user: UserUpdate) -> User:
        async with self.database.session() as session:
            row = await UserRepository(session).update(user_id, user, tenant_id=self.id)
        return User.from_row(row)

    async def delete_user(self, user_id: uuid.UUID) -> int:
        async with self.database.session() as session:
            return await UserRepository(session).delete(user_id, tenant_id=self.id)

    async def contains_username(self, username: str) -> bool:
        """Whether a user with this email exists under this tenant."""
        try:
            await self.get_user_by_username(username)
        except NotFoundError:
            return False
        return True

    async def verify_user_password(self, user_id: uuid.UUID, password: str) -> bool:
        user = await self.get_user_by_id(user_id)
        return user.verify_password(password)

    # Applications

    async def get_applications(self) -> list[Application]:
        async with self.database.session() as session:
            rows = await ApplicationRepository(session).find_by_tenant(self.id)
        return [Application.from_row(row) for row in rows]

    async def get_application_by_id(self, application_id: uuid.UUID) -> Application:
        async with self.database.session() as session:
            row = await ApplicationRepository(session).find(self.id, application_id)
        return Application.from_row(row)

    async def add_application(self, application: ApplicationCreate) -> Application:
        message = self._bind(application)
        async with self.database.session() as session:
            await self._check_storage(session, message.storage_id)
            row = await ApplicationRepository(session).create(message, self._stamp_updated_at)
        return Application.from_row(row)

    async def update_application(
        self, application_id: uuid.UUID, application: ApplicationUpdate
    ) -> Application:
        async with self.database.session() as session:
            await self._check_storage(session, application.storage_id)
            row = await ApplicationRepository(session).update(
                application_id, application, tenant_id=self.id
            )
        return Application.from_row(row)

    async def delete_application(self, application_id: uuid.UUID) -> int:
        async with self.database.session() as session:
            return await ApplicationRepository(session).delete(application_id, tenant_id=self.id)

    async def _check_storage(self, session, storage_id: Optional[uuid.UUID]) -> None:
        if storage_id is not None:
            await StorageRepository(session).find(self.id, storage_id)

    # Storages

    async def get_storages(self) -> list[Storage]:
        async with self.database.session() as session:
            rows = await StorageRepository(session).find_by_tenant(self.id)
        return [Storage.from_row(row) for row in rows]

    async def get_storage_by_id(self, storage_id: uuid.UUID) -> Storage:
        async with self.database.session() as session:
            row = await StorageRepository(session).find(self.id, storage_id)
        return Storage.from_row(row)

    async def add_storage(self, storage: StorageCreate) -> Storage:
        message = self._bind(storage)
        async with self.database.session() as session:
            row = await StorageRepository(session).create(message, self._stamp_updated_at)
        return Storage.from_row(row)

    async def update_storage(self, storage_id: uuid.UUID, storage: StorageUpdate) -> Storage:
        async with self.database.session() as session:
            row = await StorageRepository(session).update(storage_id, storage, tenant_id=self.id)
        return Storage.from_row(row)

    async def delete_storage(self, storage_id: uuid.UUID) -> int:
        async with self.database.session() as session:
            return await StorageRepository(session).delete(storage_id, tenant_id=self.id)

    # Roles

    async def get_roles(self) -> list[Role]:
        async with self.database.session() as session:
            rows = await RoleRepository(session).find_by_tenant(self.id)
        return [Role.from_row(row) for row in rows]

    async def get_role_by_id(self, role_id: uuid.UUID) -> Role:
        async with self.database.session() as session:
            row = await RoleRepository(session).find(self.id, role_id)
        return Role.from_row(row)

    async def get_roles_for_user(self, user_id: uuid.UUID) -> list[Role]:
        async with self.database.session() as session:
            rows = await RoleRepository(session).find_by_user(self.id, user_id)
        return [Role.from_row(row) for row in rows]

    async def add_role(self, role: RoleCreate) -> Role:
        message = self._bind(role)
        async with self.database.session() as session:
            await self._check_role_targets(session, message.user_id, message.application_id)
            row = await RoleRepository(session).create(message, self._stamp_updated_at)
        return Role.from_row(row)

    async def update_role(self, role_id: uuid.UUID, role: RoleUpdate) -> Role:
        async with self.database.session() as session:
            await self._check_role_targets(session, role.user_id, role.application_id)
            row = await RoleRepository(session).update(role_id, role, tenant_id=self.id)
        return Role.from_row(row)

    async def delete_role(self, role_id: uuid.UUID) -> int:
        async with self.database.session() as session:
            return await RoleRepository(session).delete(role_id, tenant_id=self.id)

    async def _check_role_targets(
        self, session, user_id: uuid.UUID, application_id: uuid.UUID
    ) -> None:
        # User and application must live in the same tenant as the role
        await UserRepository(session).find(self.id, user_id)
        await ApplicationRepository(session).find(self.id, application_id)
