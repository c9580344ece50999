"""Tenant snapshot export tests."""
import json

import pytest

from tenet.core.enums import RoleType
from tenet.core.exceptions import SerializationError, StorageIOError
from tenet.schemas import RoleCreate
from tenet.snapshot import SNAPSHOT_VERSION, export_tenant, load_snapshot, take_snapshot


@pytest.mark.asyncio
async def test_export_and_load(tmp_path, test_tenant, test_user, test_storage, test_application):
    await test_tenant.add_role(RoleCreate(
        role_type=RoleType.USER, user_id=test_user.id, application_id=test_application.id,
    ))
    path = tmp_path / "acme.json"

    exported = await export_tenant(test_tenant, path)
    loaded = load_snapshot(path)

    assert loaded.version == SNAPSHOT_VERSION
    assert loaded.tenant == test_tenant.tenant
    assert [u.id for u in loaded.users] == [test_user.id]
    assert [s.id for s in loaded.storages] == [test_storage.id]
    assert [a.id for a in loaded.applications] == [test_application.id]
    assert len(loaded.roles) == 1
    assert loaded.exported_at == exported.exported_at


@pytest.mark.asyncio
async def test_snapshot_omits_password_hashes(tmp_path, test_tenant, test_user):
    path = tmp_path / "acme.json"
    await export_tenant(test_tenant, path)

    data = json.loads(path.read_text())
    assert "password" not in data["users"][0]
    assert test_user.password not in path.read_text()


@pytest.mark.asyncio
async def test_snapshot_of_empty_tenant(test_tenant):
    snapshot = await take_snapshot(test_tenant)

    assert snapshot.tenant.id == test_tenant.id
    assert snapshot.users == []
    assert snapshot.roles == []


@pytest.mark.asyncio
async def test_export_to_unwritable_path(tmp_path, test_tenant):
    with pytest.raises(StorageIOError):
        await export_tenant(test_tenant, tmp_path / "missing" / "acme.json")


def test_load_missing_file(tmp_path):
    with pytest.raises(StorageIOError):
        load_snapshot(tmp_path / "nope.json")


def test_load_malformed_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"version": 1}')

    with pytest.raises(SerializationError):
        load_snapshot(path)
