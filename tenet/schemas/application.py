"""Application schemas."""
from typing import Optional
import uuid

from tenet.core.enums import ApplicationType
from tenet.models.application import ApplicationRow
from tenet.schemas.base import Entity, Message, as_utc, row_timestamps, utcnow


class ApplicationCreate(Message):
    """Create message for an application."""
    application_type: ApplicationType = ApplicationType.SHOP
    storage_id: Optional[uuid.UUID] = None
    tenant_id: Optional[uuid.UUID] = None

    def to_row(self, stamp_updated_at: bool = False) -> ApplicationRow:
        return ApplicationRow(
            application_type=str(self.application_type),
            storage_id=self.storage_id,
            tenant_id=self.tenant_id,
            **row_timestamps(stamp_updated_at),
        )


class ApplicationUpdate(Message):
    application_type: ApplicationType
    storage_id: Optional[uuid.UUID] = None

    def values(self) -> dict:
        return {
            "application_type": str(self.application_type),
            "storage_id": self.storage_id,
            "updated_at": utcnow(),
        }


class Application(Entity):
    """Application as seen by callers."""
    application_type: ApplicationType
    storage_id: Optional[uuid.UUID] = None
    tenant_id: Optional[uuid.UUID] = None

    @classmethod
    def from_row(cls, row: ApplicationRow) -> "Application":
        return cls(
            id=row.id,
            application_type=ApplicationType.parse(row.application_type),
            storage_id=row.storage_id,
            tenant_id=row.tenant_id,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
