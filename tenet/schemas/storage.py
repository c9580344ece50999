"""Storage schemas.

A storage populates exactly the optional fields its type needs
(see ``STORAGE_TYPE_FIELDS``); every other one is None, never "".
"""
from typing import Optional
import uuid

from pydantic import Field, model_validator

from tenet.core.enums import STORAGE_OPTIONAL_FIELDS, STORAGE_TYPE_FIELDS, StorageType
from tenet.models.storage import StorageRow
from tenet.schemas.base import Entity, Message, as_utc, row_timestamps, utcnow


def _check_storage_fields(storage_type: StorageType, fields: dict) -> None:
    required = STORAGE_TYPE_FIELDS[storage_type]
    missing = sorted(name for name in required if not fields.get(name))
    extra = sorted(
        name for name in STORAGE_OPTIONAL_FIELDS
        if name not in required and fields.get(name) is not None
    )
    if missing:
        raise ValueError(f"{storage_type} storage requires {', '.join(missing)}")
    if extra:
        raise ValueError(f"{storage_type} storage does not use {', '.join(extra)}")


class StorageFields(Message):
    """Type plus the type-conditional fields."""
    storage_type: StorageType
    path: Optional[str] = None
    connection_string: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    table_prefix: Optional[str] = None

    @model_validator(mode="after")
    def check_type_fields(self):
        _check_storage_fields(self.storage_type, self._optional_fields())
        return self

    def _optional_fields(self) -> dict:
        return {
            "path": self.path,
            "connection_string": self.connection_string,
            "schema": self.schema_name,
            "table_prefix": self.table_prefix,
        }


class StorageCreate(StorageFields):
    """Create message for a storage; use the named constructors."""
    tenant_id: Optional[uuid.UUID] = None

    @classmethod
    def json_file(cls, path: str, tenant_id: Optional[uuid.UUID] = None) -> "StorageCreate":
        return cls(storage_type=StorageType.JSON_FILE, path=path, tenant_id=tenant_id)

    @classmethod
    def sqlite_database(cls, path: str, tenant_id: Optional[uuid.UUID] = None) -> "StorageCreate":
        return cls(storage_type=StorageType.SQLITE_DATABASE, path=path, tenant_id=tenant_id)

    @classmethod
    def postgresql_database(
        cls, connection_string: str, tenant_id: Optional[uuid.UUID] = None
    ) -> "StorageCreate":
        return cls(
            storage_type=StorageType.POSTGRESQL_DATABASE,
            connection_string=connection_string,
            tenant_id=tenant_id,
        )

    @classmethod
    def postgresql_schema(
        cls, connection_string: str, schema: str, tenant_id: Optional[uuid.UUID] = None
    ) -> "StorageCreate":
        return cls(
            storage_type=StorageType.POSTGRESQL_SCHEMA,
            connection_string=connection_string,
            schema=schema,
            tenant_id=tenant_id,
        )

    @classmethod
    def postgresql_table_prefix(
        cls, connection_string: str, table_prefix: str, tenant_id: Optional[uuid.UUID] = None
    ) -> "StorageCreate":
        return cls(
            storage_type=StorageType.POSTGRESQL_TABLE_PREFIX,
            connection_string=connection_string,
            table_prefix=table_prefix,
            tenant_id=tenant_id,
        )

    def to_row(self, stamp_updated_at: bool = False) -> StorageRow:
        return StorageRow(
            storage_type=str(self.storage_type),
            path=self.path,
            connection_string=self.connection_string,
            schema=self.schema_name,
            table_prefix=self.table_prefix,
            tenant_id=self.tenant_id,
            **row_timestamps(stamp_updated_at),
        )


class StorageUpdate(StorageFields):
    """Full replacement of a storage's type and type-conditional fields."""

    def values(self) -> dict:
        return {
            "storage_type": str(self.storage_type),
            **self._optional_fields(),
            "updated_at": utcnow(),
        }


class Storage(Entity):
    """Storage configuration as seen by callers."""
    storage_type: StorageType
    path: Optional[str] = None
    connection_string: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    table_prefix: Optional[str] = None
    tenant_id: Optional[uuid.UUID] = None

    @classmethod
    def from_row(cls, row: StorageRow) -> "Storage":
        return cls(
            id=row.id,
            storage_type=StorageType.parse(row.storage_type),
            path=row.path,
            connection_string=row.connection_string,
            schema_name=row.schema,
            table_prefix=row.table_prefix,
            tenant_id=row.tenant_id,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
