"""Test configuration and fixtures."""
import pytest
import pytest_asyncio
from typing import AsyncGenerator

from tenet.core.config import Settings
from tenet.core.database import Database
from tenet.core.enums import ApplicationType
from tenet.schemas import Application, ApplicationCreate, Storage, StorageCreate, User, UserCreate
from tenet.services import TenantContext, Tenet


TEST_PASSWORD = "testpassword"


def sqlite_url(path) -> str:
    """File-backed SQLite database for one test."""
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Isolated settings pointing at a fresh database file."""
    return Settings(DATABASE_URL=sqlite_url(tmp_path / "tenet.db"))


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Database whose schema is migrated on first access."""
    db = Database(settings)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def tenet(database: Database) -> Tenet:
    return Tenet(database)


@pytest_asyncio.fixture
async def test_tenant(tenet: Tenet) -> TenantContext:
    """Create test tenant."""
    tenant = await tenet.create_tenant("Acme")
    return tenet.context(tenant)


@pytest_asyncio.fixture
async def other_tenant(tenet: Tenet) -> TenantContext:
    """A second tenant sharing the same database."""
    tenant = await tenet.create_tenant("Globex")
    return tenet.context(tenant)


@pytest_asyncio.fixture
async def test_user(test_tenant: TenantContext) -> User:
    """Create test user."""
    return await test_tenant.add_user(UserCreate(
        email="a@acme.com",
        full_name="Test User",
        password=TEST_PASSWORD,
        email_verified=True,
    ))


@pytest_asyncio.fixture
async def test_storage(test_tenant: TenantContext) -> Storage:
    """Create test JSON file storage."""
    return await test_tenant.add_storage(StorageCreate.json_file("p"))


@pytest_asyncio.fixture
async def test_application(test_tenant: TenantContext, test_storage: Storage) -> Application:
    """Create test shop application backed by the test storage."""
    return await test_tenant.add_application(ApplicationCreate(
        application_type=ApplicationType.SHOP,
        storage_id=test_storage.id,
    ))
