"""Role tests within a tenant."""
import uuid

import pytest

from tenet.core.enums import RoleType
from tenet.core.exceptions import NotFoundError
from tenet.schemas import Application, ApplicationCreate, RoleCreate, RoleUpdate, User, UserCreate
from tenet.services import TenantContext


@pytest.mark.asyncio
async def test_user_with_two_roles(
    test_tenant: TenantContext, test_user: User, test_application: Application
):
    """Test one user holding roles on two applications."""
    second_app = await test_tenant.add_application(ApplicationCreate())

    admin = await test_tenant.add_role(RoleCreate(
        role_type=RoleType.ADMINISTRATOR, user_id=test_user.id, application_id=test_application.id,
    ))
    member = await test_tenant.add_role(RoleCreate(
        role_type=RoleType.USER, user_id=test_user.id, application_id=second_app.id,
    ))

    roles = await test_tenant.get_roles_for_user(test_user.id)
    assert {r.id for r in roles} == {admin.id, member.id}
    assert max(r.role_type for r in roles) is RoleType.ADMINISTRATOR
    assert len(await test_tenant.get_roles()) == 2

    fetched = await test_tenant.get_role_by_id(admin.id)
    assert fetched.user_id == test_user.id
    assert fetched.application_id == test_application.id
    assert fetched.tenant_id == test_tenant.id


@pytest.mark.asyncio
async def test_role_targets_must_share_tenant(
    test_tenant: TenantContext,
    other_tenant: TenantContext,
    test_user: User,
    test_application: Application,
):
    outsider = await other_tenant.add_user(UserCreate(
        email="b@globex.com", full_name="Outsider", password="pw",
    ))

    with pytest.raises(NotFoundError):
        await test_tenant.add_role(RoleCreate(
            role_type=RoleType.USER, user_id=outsider.id, application_id=test_application.id,
        ))
    with pytest.raises(NotFoundError):
        await other_tenant.add_role(RoleCreate(
            role_type=RoleType.USER, user_id=outsider.id, application_id=test_application.id,
        ))
    assert await test_tenant.get_roles() == []


@pytest.mark.asyncio
async def test_update_and_delete_role(
    test_tenant: TenantContext, test_user: User, test_application: Application
):
    role = await test_tenant.add_role(RoleCreate(
        role_type=RoleType.USER, user_id=test_user.id, application_id=test_application.id,
    ))

    promoted = await test_tenant.update_role(role.id, RoleUpdate(
        role_type=RoleType.ADMINISTRATOR, user_id=test_user.id, application_id=test_application.id,
    ))
    assert promoted.role_type is RoleType.ADMINISTRATOR
    assert promoted.updated_at is not None

    assert await test_tenant.delete_role(role.id) == 1
    with pytest.raises(NotFoundError):
        await test_tenant.get_role_by_id(role.id)


@pytest.mark.asyncio
async def test_role_invisible_to_other_tenant(
    test_tenant: TenantContext,
    other_tenant: TenantContext,
    test_user: User,
    test_application: Application,
):
    role = await test_tenant.add_role(RoleCreate(
        role_type=RoleType.USER, user_id=test_user.id, application_id=test_application.id,
    ))

    with pytest.raises(NotFoundError):
        await other_tenant.get_role_by_id(role.id)
    assert await other_tenant.get_roles_for_user(test_user.id) == []
    assert await other_tenant.delete_role(role.id) == 0


@pytest.mark.asyncio
async def test_roles_for_unknown_user(test_tenant: TenantContext):
    assert await test_tenant.get_roles_for_user(uuid.uuid4()) == []
