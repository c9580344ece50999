"""Repositories: single-statement CRUD over one table each."""
from tenet.repositories.base import BaseRepository, RowRepository, TenantScopedRepository
from tenet.repositories.tenant import TenantRepository
from tenet.repositories.user import UserRepository
from tenet.repositories.storage import StorageRepository
from tenet.repositories.application import ApplicationRepository
from tenet.repositories.role import RoleRepository

__all__ = [
    "BaseRepository", "RowRepository", "TenantScopedRepository",
    "TenantRepository", "UserRepository", "StorageRepository",
    "ApplicationRepository", "RoleRepository",
]
