"""User tests within a tenant."""
import uuid

import pytest
from sqlalchemy import select

from tenet.core.enums import EncryptionMode
from tenet.core.exceptions import ConflictError, NotFoundError, PasswordHashingError
from tenet.models import UserRow
from tenet.schemas import User, UserCreate, UserUpdate
from tenet.services import TenantContext

TEST_PASSWORD = "testpassword"


@pytest.mark.asyncio
async def test_add_and_get_user(test_tenant: TenantContext, test_user: User):
    """Test a stored user reads back field for field."""
    fetched = await test_tenant.get_user_by_id(test_user.id)

    assert fetched.id == test_user.id
    assert fetched.email == "a@acme.com"
    assert fetched.username == "a@acme.com"
    assert fetched.full_name == "Test User"
    assert fetched.email_verified is True
    assert fetched.encryption_mode is EncryptionMode.ARGON2
    assert fetched.tenant_id == test_tenant.id
    assert fetched.created_at == test_user.created_at
    assert fetched.updated_at is None


@pytest.mark.asyncio
async def test_password_is_hashed_at_rest(test_tenant: TenantContext, test_user: User, database):
    async with database.session() as session:
        row = (await session.execute(select(UserRow).where(UserRow.id == test_user.id))).scalar_one()

    assert row.password != TEST_PASSWORD
    assert row.password.startswith("$argon2")
    assert test_user.password == row.password


@pytest.mark.asyncio
async def test_password_hidden_from_output(test_user: User):
    assert "password" not in test_user.model_dump()
    assert "password" not in test_user.to_json()
    assert test_user.password not in repr(test_user)


@pytest.mark.asyncio
async def test_verify_user_password(test_tenant: TenantContext, test_user: User):
    assert await test_tenant.verify_user_password(test_user.id, TEST_PASSWORD) is True
    assert await test_tenant.verify_user_password(test_user.id, "wrong") is False


@pytest.mark.asyncio
async def test_malformed_stored_hash(test_tenant: TenantContext, test_user: User, database):
    async with database.session() as session:
        row = (await session.execute(select(UserRow).where(UserRow.id == test_user.id))).scalar_one()
        row.password = "not-a-hash"

    with pytest.raises(PasswordHashingError):
        await test_tenant.verify_user_password(test_user.id, TEST_PASSWORD)


@pytest.mark.asyncio
async def test_user_ids_and_listing(test_tenant: TenantContext, test_user: User):
    second = await test_tenant.add_user(UserCreate(
        email="b@acme.com", full_name="Second", password="pw",
    ))

    assert set(await test_tenant.get_user_ids()) == {test_user.id, second.id}
    assert {u.email for u in await test_tenant.get_users()} == {"a@acme.com", "b@acme.com"}


@pytest.mark.asyncio
async def test_contains_username_is_tenant_scoped(
    test_tenant: TenantContext, other_tenant: TenantContext, test_user: User
):
    assert await test_tenant.contains_username("a@acme.com") is True
    assert await test_tenant.contains_username("missing@acme.com") is False
    assert await other_tenant.contains_username("a@acme.com") is False


@pytest.mark.asyncio
async def test_username_lookup_matches_stored_email(test_tenant: TenantContext):
    user = await test_tenant.add_user(UserCreate(
        email="a@Acme.COM", full_name="Mixed Case", password="pw",
    ))

    assert user.email == "a@acme.com"
    assert await test_tenant.contains_username("a@Acme.COM") is True
    assert (await test_tenant.get_user_by_username("a@Acme.COM")).id == user.id


@pytest.mark.asyncio
async def test_user_invisible_to_other_tenant(
    other_tenant: TenantContext, test_user: User
):
    with pytest.raises(NotFoundError):
        await other_tenant.get_user_by_id(test_user.id)
    with pytest.raises(NotFoundError):
        await other_tenant.get_user_by_username("a@acme.com")
    with pytest.raises(NotFoundError):
        await other_tenant.update_user(test_user.id, UserUpdate(
            email="a@acme.com", full_name="Hijacked",
        ))
    assert await other_tenant.delete_user(test_user.id) == 0
    assert await other_tenant.get_users() == []


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(
    test_tenant: TenantContext, other_tenant: TenantContext, test_user: User
):
    with pytest.raises(ConflictError):
        await other_tenant.add_user(UserCreate(
            email="a@acme.com", full_name="Copy", password="pw",
        ))
    assert await other_tenant.get_users() == []


@pytest.mark.asyncio
async def test_message_bound_to_another_tenant(
    test_tenant: TenantContext, other_tenant: TenantContext
):
    with pytest.raises(ConflictError):
        await test_tenant.add_user(UserCreate(
            email="c@acme.com", full_name="C", password="pw", tenant_id=other_tenant.id,
        ))


@pytest.mark.asyncio
async def test_update_user(test_tenant: TenantContext, test_user: User):
    updated = await test_tenant.update_user(test_user.id, UserUpdate(
        email="renamed@acme.com", full_name="Renamed", email_verified=False,
    ))

    assert updated.email == "renamed@acme.com"
    assert updated.full_name == "Renamed"
    assert updated.email_verified is False
    assert updated.updated_at is not None
    # Password kept when the update carries none
    assert updated.verify_password(TEST_PASSWORD)


@pytest.mark.asyncio
async def test_update_user_password(test_tenant: TenantContext, test_user: User):
    await test_tenant.update_user(test_user.id, UserUpdate(
        email="a@acme.com", full_name="Test User", password="new-secret",
    ))

    assert await test_tenant.verify_user_password(test_user.id, "new-secret") is True
    assert await test_tenant.verify_user_password(test_user.id, TEST_PASSWORD) is False


@pytest.mark.asyncio
async def test_update_missing_user(test_tenant: TenantContext):
    with pytest.raises(NotFoundError):
        await test_tenant.update_user(uuid.uuid4(), UserUpdate(email="x@acme.com", full_name="X"))


@pytest.mark.asyncio
async def test_delete_user(test_tenant: TenantContext, test_user: User):
    assert await test_tenant.delete_user(test_user.id) == 1
    assert await test_tenant.delete_user(test_user.id) == 0
    with pytest.raises(NotFoundError):
        await test_tenant.get_user_by_id(test_user.id)


@pytest.mark.asyncio
async def test_invalid_email_rejected():
    with pytest.raises(ValueError):
        UserCreate(email="not-an-email", full_name="X", password="pw")
