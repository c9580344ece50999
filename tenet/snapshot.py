"""JSON snapshots of a tenant and everything it owns.

Password hashes are never written; users in a snapshot cannot be used to
verify credentials.
"""
from datetime import datetime
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError

from tenet.core.exceptions import SerializationError, StorageIOError
from tenet.core.logging import get_logger
from tenet.schemas import Application, Role, Storage, Tenant, User
from tenet.schemas.base import utcnow
from tenet.services.tenant_context import TenantContext


logger = get_logger(__name__)

SNAPSHOT_VERSION = 1


class TenantSnapshot(BaseModel):
    version: int = SNAPSHOT_VERSION
    exported_at: datetime = Field(default_factory=utcnow)
    tenant: Tenant
    users: list[User] = []
    storages: list[Storage] = []
    applications: list[Application] = []
    roles: list[Role] = []


async def take_snapshot(context: TenantContext) -> TenantSnapshot:
    return TenantSnapshot(
        tenant=context.tenant,
        users=await context.get_users(),
        storages=await context.get_storages(),
        applications=await context.get_applications(),
        roles=await context.get_roles(),
    )


async def export_tenant(context: TenantContext, path: Union[str, Path]) -> TenantSnapshot:
    """Write the tenant's snapshot to ``path`` as JSON."""
    snapshot = await take_snapshot(context)
    try:
        data = snapshot.model_dump_json(by_alias=True, indent=2)
    except (ValueError, TypeError) as e:
        raise SerializationError(f"Failed to encode snapshot: {e}") from e
    try:
        Path(path).write_text(data, encoding="utf-8")
    except OSError as e:
        raise StorageIOError(f"Failed to write snapshot to {path}: {e}") from e
    logger.info(f"Tenant snapshot written to {path}", extra={"tenant_id": context.id})
    return snapshot


def load_snapshot(path: Union[str, Path]) -> TenantSnapshot:
    """Read a snapshot written by ``export_tenant``."""
    try:
        data = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise StorageIOError(f"Failed to read snapshot from {path}: {e}") from e
    try:
        return TenantSnapshot.model_validate_json(data)
    except ValidationError as e:
        raise SerializationError(f"Malformed snapshot {path}: {e}") from e
