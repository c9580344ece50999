"""User schemas.

The public ``User`` keeps the encoded password hash so it can verify
credentials, but the hash is excluded from serialized output and repr.
"""
from typing import Optional
import uuid

from pydantic import EmailStr, Field, TypeAdapter, ValidationError

from tenet.core import security
from tenet.core.enums import EncryptionMode
from tenet.models.user import UserRow
from tenet.schemas.base import Entity, Message, as_utc, row_timestamps, utcnow


_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    """Stored form of an email: the same normalization ``EmailStr`` applies on create."""
    try:
        return _email_adapter.validate_python(email)
    except ValidationError:
        return email


class UserCreate(Message):
    """Create message for a user. ``password`` is plaintext until persisted."""
    email: EmailStr
    full_name: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1, repr=False)
    encryption_mode: EncryptionMode = EncryptionMode.ARGON2
    email_verified: bool = False
    tenant_id: Optional[uuid.UUID] = None

    @property
    def username(self) -> str:
        return self.email

    def to_row(self, stamp_updated_at: bool = False) -> UserRow:
        return UserRow(
            email=self.email,
            email_verified=self.email_verified,
            password=self.password,
            encryption_mode=str(self.encryption_mode),
            full_name=self.full_name,
            tenant_id=self.tenant_id,
            **row_timestamps(stamp_updated_at),
        )


class UserUpdate(Message):
    """Full replacement of a user's profile fields.

    ``password`` is an optional new plaintext password; when omitted the
    stored hash is kept.
    """
    email: EmailStr
    full_name: str = Field(..., max_length=255)
    email_verified: bool = False
    encryption_mode: EncryptionMode = EncryptionMode.ARGON2
    password: Optional[str] = Field(default=None, min_length=1, repr=False)

    def values(self) -> dict:
        values = {
            "email": self.email,
            "full_name": self.full_name,
            "email_verified": self.email_verified,
            "encryption_mode": str(self.encryption_mode),
            "updated_at": utcnow(),
        }
        if self.password is not None:
            values["password"] = self.password
        return values


class User(Entity):
    """User as seen by callers. The email doubles as the username."""
    email: str
    email_verified: bool
    password: str = Field(default="", exclude=True, repr=False)
    encryption_mode: EncryptionMode
    full_name: str
    tenant_id: Optional[uuid.UUID] = None

    @property
    def username(self) -> str:
        return self.email

    def verify_password(self, password: str) -> bool:
        """Check ``password`` against the stored hash."""
        return security.verify_password(password, self.password)

    @classmethod
    def from_row(cls, row: UserRow) -> "User":
        return cls(
            id=row.id,
            email=row.email,
            email_verified=row.email_verified,
            password=row.password,
            encryption_mode=EncryptionMode.parse(row.encryption_mode),
            full_name=row.full_name,
            tenant_id=row.tenant_id,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
