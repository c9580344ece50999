"""Role schemas."""
from typing import Optional
import uuid

from tenet.core.enums import RoleType
from tenet.models.role import RoleRow
from tenet.schemas.base import Entity, Message, as_utc, row_timestamps, utcnow


class RoleCreate(Message):
    """Grant ``role_type`` to a user within an application."""
    role_type: RoleType
    user_id: uuid.UUID
    application_id: uuid.UUID
    tenant_id: Optional[uuid.UUID] = None

    def to_row(self, stamp_updated_at: bool = False) -> RoleRow:
        return RoleRow(
            role_type=str(self.role_type),
            user_id=self.user_id,
            application_id=self.application_id,
            tenant_id=self.tenant_id,
            **row_timestamps(stamp_updated_at),
        )


class RoleUpdate(Message):
    role_type: RoleType
    user_id: uuid.UUID
    application_id: uuid.UUID

    def values(self) -> dict:
        return {
            "role_type": str(self.role_type),
            "user_id": self.user_id,
            "application_id": self.application_id,
            "updated_at": utcnow(),
        }


class Role(Entity):
    """Role assignment as seen by callers."""
    role_type: RoleType
    user_id: Optional[uuid.UUID] = None
    application_id: Optional[uuid.UUID] = None
    tenant_id: Optional[uuid.UUID] = None

    @classmethod
    def from_row(cls, row: RoleRow) -> "Role":
        return cls(
            id=row.id,
            role_type=RoleType.parse(row.role_type),
            user_id=row.user_id,
            application_id=row.application_id,
            tenant_id=row.tenant_id,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
