"""SQLAlchemy models."""
from tenet.models.tenant import TenantRow
from tenet.models.user import UserRow
from tenet.models.storage import StorageRow
from tenet.models.application import ApplicationRow
from tenet.models.role import RoleRow

__all__ = ["TenantRow", "UserRow", "StorageRow", "ApplicationRow", "RoleRow"]
