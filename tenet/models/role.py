"""Role row."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from tenet.core.database import Base


class RoleRow(Base):
    """A user's permission level within one application."""

    __tablename__ = "roles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    role_type: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=True
    )
    application_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("applications.id"),
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

    __table_args__ = (
        Index("ix_roles_tenant_user", "tenant_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<RoleRow id={self.id} role_type={self.role_type} user_id={self.user_id}>"
