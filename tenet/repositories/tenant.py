"""Tenant repository."""
from typing import Optional
import uuid

from sqlalchemy import select

from tenet.core.exceptions import NotFoundError
from tenet.models import TenantRow
from tenet.repositories.base import RowRepository
from tenet.schemas.tenant import TenantCreate, TenantUpdate


class TenantRepository(RowRepository[TenantRow]):
    model = TenantRow
    entity_name = "Tenant"

    async def find_all(self) -> list[TenantRow]:
        result = await self.scalars(select(TenantRow))
        return list(result)

    async def find_ids(self) -> list[uuid.UUID]:
        result = await self.scalars(select(TenantRow.id))
        return list(result)

    async def find(self, tenant_id: uuid.UUID) -> TenantRow:
        row = await self.find_optional(tenant_id)
        if row is None:
            raise NotFoundError(f"Tenant {tenant_id} not found")
        return row

    async def find_optional(self, tenant_id: uuid.UUID) -> Optional[TenantRow]:
        return await self._get(TenantRow.id == tenant_id)

    async def find_by_title(self, title: str) -> TenantRow:
        stmt = select(TenantRow).where(TenantRow.title == title).limit(1)
        row = await self.scalar_one_or_none(stmt)
        if row is None:
            raise NotFoundError(f"Tenant {title!r} not found")
        return row

    async def create(self, message: TenantCreate, stamp_updated_at: bool = False) -> TenantRow:
        return await self.insert(message.to_row(stamp_updated_at))

    async def update(self, tenant_id: uuid.UUID, message: TenantUpdate) -> TenantRow:
        try:
            return await self._update(message.values(), TenantRow.id == tenant_id)
        except NotFoundError:
            raise NotFoundError(f"Tenant {tenant_id} not found") from None

    async def delete(self, tenant_id: uuid.UUID) -> int:
        return await self._delete(TenantRow.id == tenant_id)
