"""Shared behaviour of public entities and create/update messages."""
from datetime import datetime, timezone
from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, ValidationError

from tenet.core.exceptions import SerializationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps read back from drivers that drop it."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def new_id() -> uuid.UUID:
    return uuid.uuid4()


class Entity(BaseModel):
    """Public entity mapped from a stored row."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_json(self) -> str:
        try:
            return self.model_dump_json(by_alias=True)
        except (ValueError, TypeError) as e:
            raise SerializationError(f"Failed to encode {type(self).__name__}: {e}") from e

    @classmethod
    def from_json(cls, data):
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise SerializationError(f"Failed to decode {cls.__name__}: {e}") from e


class Message(BaseModel):
    """Inbound create/update message."""

    model_config = ConfigDict(populate_by_name=True)


def row_timestamps(stamp_updated_at: bool) -> dict:
    """Identity and timestamps assigned when a create message becomes a row."""
    now = utcnow()
    return {
        "id": new_id(),
        "created_at": now,
        "updated_at": now if stamp_updated_at else None,
    }
