"""User repository."""
from typing import Optional
import uuid

from sqlalchemy import select

from tenet.core.exceptions import NotFoundError
from tenet.core.security import hash_password
from tenet.models import UserRow
from tenet.repositories.base import TenantScopedRepository
from tenet.schemas.user import UserCreate, UserUpdate, normalize_email


class UserRepository(TenantScopedRepository[UserRow]):
    """Users; the password is hashed here, right before the insert."""

    model = UserRow
    entity_name = "User"

    async def find_by_email(self, email: str) -> UserRow:
        """Global lookup used to find which tenant a login belongs to."""
        email = normalize_email(email)
        stmt = select(UserRow).where(UserRow.email == email).limit(1)
        row = await self.scalar_one_or_none(stmt)
        if row is None:
            raise NotFoundError(f"User {email!r} not found")
        return row

    async def find_by_tenant_and_email(self, tenant_id: uuid.UUID, email: str) -> UserRow:
        email = normalize_email(email)
        stmt = (
            select(UserRow)
            .where(UserRow.tenant_id == tenant_id, UserRow.email == email)
            .limit(1)
        )
        row = await self.scalar_one_or_none(stmt)
        if row is None:
            raise NotFoundError(f"User {email!r} not found in tenant {tenant_id}")
        return row

    async def create(self, message: UserCreate, stamp_updated_at: bool = False) -> UserRow:
        row = message.to_row(stamp_updated_at)
        row.password = hash_password(row.password)
        return await self.insert(row)

    async def update(
        self,
        user_id: uuid.UUID,
        message: UserUpdate,
        tenant_id: Optional[uuid.UUID] = None,
    ) -> UserRow:
        values = message.values()
        if "password" in values:
            values["password"] = hash_password(values["password"])
        criteria = [UserRow.id == user_id]
        if tenant_id is not None:
            criteria.append(UserRow.tenant_id == tenant_id)
        try:
            return await self._update(values, *criteria)
        except NotFoundError:
            raise NotFoundError(f"User {user_id} not found") from None
