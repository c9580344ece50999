"""Application repository."""
from tenet.models import ApplicationRow
from tenet.repositories.base import TenantScopedRepository


class ApplicationRepository(TenantScopedRepository[ApplicationRow]):
    model = ApplicationRow
    entity_name = "Application"
