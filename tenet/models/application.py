"""Application row."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from tenet.core.database import Base


class ApplicationRow(Base):
    """Application row, optionally bound to a storage."""

    __tablename__ = "applications"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    application_type: Mapped[str] = mapped_column(String(64), nullable=False)
    storage_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("storages.id"),
        nullable=True
    )
    tenant_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("tenants.id"),
        nullable=True,
        index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<ApplicationRow id={self.id} application_type={self.application_type} tenant_id={self.tenant_id}>"
