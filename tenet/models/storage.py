"""Storage row."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from tenet.core.database import Base


class StorageRow(Base):
    """Storage configuration; only the columns of its storage type are set."""

    __tablename__ = "storages"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    tenant_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("tenants.id"),
        nullable=True,
        index=True
    )
    storage_type: Mapped[str] = mapped_column(String(64), nullable=False)
    path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    connection_string: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    schema: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    table_prefix: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<StorageRow id={self.id} storage_type={self.storage_type} tenant_id={self.tenant_id}>"
