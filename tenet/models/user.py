"""User row."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from tenet.core.database import Base
from tenet.core.enums import EncryptionMode


class UserRow(Base):
    """User row. ``password`` only ever holds an encoded hash."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    encryption_mode: Mapped[str] = mapped_column(
        String(32),
        default=EncryptionMode.ARGON2.value,
        nullable=False
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    tenant_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("tenants.id"),
        nullable=True,
        index=True
    )

    __table_args__ = (
        Index("ix_users_tenant_email", "tenant_id", "email"),
    )

    def __repr__(self) -> str:
        return f"<UserRow id={self.id} email={self.email!r} tenant_id={self.tenant_id}>"
