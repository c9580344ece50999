"""Storage repository."""
from tenet.models import StorageRow
from tenet.repositories.base import TenantScopedRepository


class StorageRepository(TenantScopedRepository[StorageRow]):
    model = StorageRow
    entity_name = "Storage"
