"""Tenant schemas."""
from pydantic import Field, field_validator

from tenet.models.tenant import TenantRow
from tenet.schemas.base import Entity, Message, as_utc, row_timestamps, utcnow


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class TenantCreate(Message):
    """Create message for a tenant."""
    title: str = Field(..., min_length=1, max_length=255)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return _strip(v)

    def to_row(self, stamp_updated_at: bool = False) -> TenantRow:
        return TenantRow(title=self.title, **row_timestamps(stamp_updated_at))


class TenantUpdate(Message):
    """Full replacement of a tenant's mutable fields."""
    title: str = Field(..., min_length=1, max_length=255)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return _strip(v)

    def values(self) -> dict:
        return {"title": self.title, "updated_at": utcnow()}


class Tenant(Entity):
    """Tenant as seen by callers."""
    title: str

    @classmethod
    def from_row(cls, row: TenantRow) -> "Tenant":
        return cls(
            id=row.id,
            title=row.title,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
