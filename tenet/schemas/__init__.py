"""Pydantic schemas: public entities and their create/update messages."""
from tenet.schemas.tenant import Tenant, TenantCreate, TenantUpdate
from tenet.schemas.user import User, UserCreate, UserUpdate
from tenet.schemas.storage import Storage, StorageCreate, StorageUpdate
from tenet.schemas.application import Application, ApplicationCreate, ApplicationUpdate
from tenet.schemas.role import Role, RoleCreate, RoleUpdate

__all__ = [
    "Tenant", "TenantCreate", "TenantUpdate",
    "User", "UserCreate", "UserUpdate",
    "Storage", "StorageCreate", "StorageUpdate",
    "Application", "ApplicationCreate", "ApplicationUpdate",
    "Role", "RoleCreate", "RoleUpdate",
]
