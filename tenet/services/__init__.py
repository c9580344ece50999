"""Service layer."""
from tenet.services.tenant_context import TenantContext
from tenet.services.tenet import Tenet

__all__ = ["TenantContext", "Tenet"]
