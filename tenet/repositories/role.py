"""Role repository."""
import uuid

from sqlalchemy import select

from tenet.models import RoleRow
from tenet.repositories.base import TenantScopedRepository


class RoleRepository(TenantScopedRepository[RoleRow]):
    model = RoleRow
    entity_name = "Role"

    async def find_by_user(self, tenant_id: uuid.UUID, user_id: uuid.UUID) -> list[RoleRow]:
        stmt = select(RoleRow).where(RoleRow.tenant_id == tenant_id, RoleRow.user_id == user_id)
        result = await self.scalars(stmt)
        return list(result)
