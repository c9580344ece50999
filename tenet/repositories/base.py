"""Repository base classes."""
from typing import Any, Generic, Optional, Type, TypeVar
import uuid

from sqlalchemy import Executable, delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenet.core.database import translate_db_error
from tenet.core.exceptions import NotFoundError
from tenet.core.logging import get_logger


logger = get_logger(__name__)

RowT = TypeVar("RowT")


class BaseRepository:
    """
    Base class for repositories providing common helpers.

    Note:
      SQLAlchemy errors never leave a repository untranslated; callers see
      ConflictError / NotFoundError / PersistenceError / DatabaseConnectionError.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        try:
            return await self.session.execute(statement, params or {})
        except SQLAlchemyError as e:
            raise translate_db_error(e) from e

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return scalars."""
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one_or_none(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return a single scalar or None."""
        result = await self.execute(statement, params)
        return result.scalar_one_or_none()

    async def flush(self) -> None:
        """Flush pending changes so constraint violations surface here."""
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise translate_db_error(e) from e

    async def refresh(self, entity: Any) -> None:
        try:
            await self.session.refresh(entity)
        except SQLAlchemyError as e:
            raise translate_db_error(e) from e

    async def add(self, entity: Any) -> None:
        """Add a single entity to session."""
        self.session.add(entity)


class RowRepository(BaseRepository, Generic[RowT]):
    """Single-table CRUD keyed by a UUID primary key."""

    model: Type[RowT]
    entity_name: str = "Record"

    async def insert(self, row: RowT) -> RowT:
        await self.add(row)
        await self.flush()
        await self.refresh(row)
        logger.info(f"{self.entity_name} created", extra={
            "entity": self.entity_name,
            "entity_id": row.id,
            "tenant_id": getattr(row, "tenant_id", None),
        })
        return row

    async def _get(self, *criteria) -> Optional[RowT]:
        stmt = select(self.model).where(*criteria).execution_options(populate_existing=True)
        return await self.scalar_one_or_none(stmt)

    async def _update(self, values: dict, *criteria) -> RowT:
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(f"{self.entity_name} not found")
        row = await self._get(*criteria)
        if row is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return row

    async def _delete(self, *criteria) -> int:
        stmt = delete(self.model).where(*criteria).execution_options(synchronize_session=False)
        result = await self.execute(stmt)
        return result.rowcount

    async def _count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await self.execute(stmt)
        return int(result.scalar_one())


class TenantScopedRepository(RowRepository[RowT]):
    """CRUD for rows owned by a tenant.

    Single-row lookups always match both the tenant and the row id, so an id
    that exists under another tenant is reported as NotFoundError.
    """

    async def find_by_tenant(self, tenant_id: uuid.UUID) -> list[RowT]:
        stmt = select(self.model).where(self.model.tenant_id == tenant_id)
        result = await self.scalars(stmt)
        return list(result)

    async def find(self, tenant_id: uuid.UUID, entity_id: uuid.UUID) -> RowT:
        row = await self._get(self.model.id == entity_id, self.model.tenant_id == tenant_id)
        if row is None:
            raise NotFoundError(f"{self.entity_name} {entity_id} not found in tenant {tenant_id}")
        return row

    async def create(self, message, stamp_updated_at: bool = False) -> RowT:
        return await self.insert(message.to_row(stamp_updated_at))

    async def update(self, entity_id: uuid.UUID, message, tenant_id: Optional[uuid.UUID] = None) -> RowT:
        """Replace the message's fields on one row; NotFoundError if none matched."""
        criteria = [self.model.id == entity_id]
        if tenant_id is not None:
            criteria.append(self.model.tenant_id == tenant_id)
        try:
            return await self._update(message.values(), *criteria)
        except NotFoundError:
            raise NotFoundError(f"{self.entity_name} {entity_id} not found") from None

    async def delete(self, entity_id: uuid.UUID, tenant_id: Optional[uuid.UUID] = None) -> int:
        """Delete one row; returns the number of rows removed (0 or 1)."""
        criteria = [self.model.id == entity_id]
        if tenant_id is not None:
            criteria.append(self.model.tenant_id == tenant_id)
        deleted = await self._delete(*criteria)
        logger.info(f"{self.entity_name} delete affected {deleted} row(s)", extra={
            "entity": self.entity_name,
            "entity_id": entity_id,
        })
        return deleted

    async def delete_by_tenant(self, tenant_id: uuid.UUID) -> int:
        return await self._delete(self.model.tenant_id == tenant_id)

    async def count_by_tenant(self, tenant_id: uuid.UUID) -> int:
        return await self._count(self.model.tenant_id == tenant_id)
