"""Closed enums stored by their canonical string."""
from enum import Enum

from tenet.core.exceptions import ParseError


class CanonicalEnum(str, Enum):
    """String enum whose value is the canonical storage form."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str):
        """Return the member for ``value`` or raise ParseError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ParseError(cls.__name__, value) from None


class ApplicationType(CanonicalEnum):
    """Kinds of application a tenant can run."""
    SHOP = "Shop"


class StorageType(CanonicalEnum):
    """Storage backends an application can be configured with."""
    JSON_FILE = "JsonFile"
    SQLITE_DATABASE = "SqliteDatabase"
    POSTGRESQL_DATABASE = "PostgreSqlDatabase"
    POSTGRESQL_SCHEMA = "PostgreSqlSchema"
    POSTGRESQL_TABLE_PREFIX = "PostgreSqlTablePrefix"

    @property
    def is_file_backed(self) -> bool:
        return self in (StorageType.JSON_FILE, StorageType.SQLITE_DATABASE)


# Fields each storage type populates; every other optional field stays None
STORAGE_TYPE_FIELDS = {
    StorageType.JSON_FILE: frozenset({"path"}),
    StorageType.SQLITE_DATABASE: frozenset({"path"}),
    StorageType.POSTGRESQL_DATABASE: frozenset({"connection_string"}),
    StorageType.POSTGRESQL_SCHEMA: frozenset({"connection_string", "schema"}),
    StorageType.POSTGRESQL_TABLE_PREFIX: frozenset({"connection_string", "table_prefix"}),
}

STORAGE_OPTIONAL_FIELDS = ("path", "connection_string", "schema", "table_prefix")


class RoleType(CanonicalEnum):
    """Permission level of a user within an application.

    Ordered by privilege: ``ADMINISTRATOR > USER``.
    """
    ADMINISTRATOR = "Administrator"
    USER = "User"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, RoleType):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RoleType):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RoleType):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RoleType):
            return NotImplemented
        return self.rank >= other.rank


_ROLE_RANK = {RoleType.USER: 0, RoleType.ADMINISTRATOR: 1}


class EncryptionMode(CanonicalEnum):
    """Password hashing scheme a user's credential is stored with."""
    ARGON2 = "Argon2"

    @property
    def scheme(self) -> str:
        """passlib scheme name."""
        return "argon2"
