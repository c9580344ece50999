"""Error taxonomy.

Every failure surfaced by the library is a ``TenetError``. Database errors
are translated at the repository boundary and re-raised with the original
exception chained as ``__cause__``.
"""
from typing import Optional


class TenetError(Exception):
    """Base class for all library errors."""

    message = "Tenet error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class StorageIOError(TenetError):
    message = "Data storage access failed"


class SerializationError(TenetError):
    message = "Serialization or deserialization failed"


class DatabaseConnectionError(TenetError):
    message = "Database connection error"


class MigrationError(TenetError):
    message = "Database migration failed"


class PersistenceError(TenetError):
    message = "Database error"


class ConflictError(PersistenceError):
    message = "Record conflicts with existing data"


class TenantNotEmptyError(ConflictError):
    message = "Tenant still owns records"

    def __init__(self, tenant_id, counts: dict[str, int]):
        self.tenant_id = tenant_id
        self.counts = counts
        owned = ", ".join(f"{n} {name}" for name, n in counts.items() if n)
        super().__init__(f"Tenant {tenant_id} still owns {owned}")


class NotFoundError(TenetError):
    message = "Not found"


class PasswordHashingError(TenetError):
    message = "Password hashing error"


class ParseError(TenetError, ValueError):
    """Raised when a canonical string does not name a member of a closed enum."""

    def __init__(self, enum_name: str, value: object):
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"{value!r} is not a valid {enum_name}")
