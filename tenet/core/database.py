"""Database engine, pooled connections and schema migrations."""
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import MetaData
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from tenet.core.config import Settings
from tenet.core.exceptions import (
    ConflictError,
    DatabaseConnectionError,
    MigrationError,
    NotFoundError,
    PersistenceError,
    TenetError,
)
from tenet.core.logging import get_logger


logger = get_logger(__name__)

MIGRATIONS_PATH = Path(__file__).resolve().parent.parent / "migrations"


def normalize_async_database_url(database_url: str) -> str:
    """Normalize a database URL to the installed async driver(s)."""
    # Accept legacy asyncpg URLs and run with psycopg driver (psycopg 3)
    if database_url.startswith("postgresql+asyncpg://"):
        return database_url.replace("postgresql+asyncpg://", "postgresql+psycopg://", 1)

    # Accept legacy heroku-style postgres:// URLs and ensure psycopg driver
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+psycopg://", 1)

    # Ensure plain postgresql:// uses the installed psycopg (v3) driver
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)

    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    return database_url


def normalize_sync_database_url(database_url: str) -> str:
    """Sync-driver variant used by the Alembic command line."""
    url = normalize_async_database_url(database_url)
    if url.startswith("sqlite+aiosqlite://"):
        return url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    return url


# Naming convention for constraints
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    metadata = metadata


def alembic_config() -> AlembicConfig:
    """Alembic configuration pointing at the packaged migration scripts."""
    config = AlembicConfig()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    return config


def translate_db_error(error: sa_exc.SQLAlchemyError) -> TenetError:
    """Map a SQLAlchemy exception onto the library's error taxonomy."""
    if isinstance(error, sa_exc.IntegrityError):
        return ConflictError(str(error.orig) if error.orig is not None else str(error))
    if isinstance(error, sa_exc.NoResultFound):
        return NotFoundError("Record not found")
    if isinstance(error, (sa_exc.TimeoutError, sa_exc.DisconnectionError, sa_exc.InterfaceError)):
        return DatabaseConnectionError(f"Failed to get database connection: {error}")
    return PersistenceError(f"Database error: {error}")


async def _checkout(engine: AsyncEngine) -> AsyncConnection:
    try:
        return await engine.connect()
    except (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.TimeoutError, OSError) as e:
        raise DatabaseConnectionError(f"Failed to get database connection: {e}") from e


def _is_memory_sqlite(url: str) -> bool:
    database = url.split("://", 1)[-1].lstrip("/")
    return database in ("", ":memory:") or "mode=memory" in database


def _upgrade_to_head(sync_connection) -> None:
    config = alembic_config()
    config.attributes["connection"] = sync_connection
    command.upgrade(config, "head")


class Database:
    """Lazily initialized connection pool for one database.

    The engine is built and pending migrations are applied on first access.
    Every repository call checks out its own pooled connection.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def url(self) -> str:
        return normalize_async_database_url(self.settings.database_url)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _create_engine(self) -> AsyncEngine:
        if self.settings.uses_default_database_url:
            logger.info("Database url not set, using default connection string")

        engine_kwargs = {
            "echo": self.settings.DEBUG,
            "pool_pre_ping": True,
        }
        try:
            # In-memory SQLite runs on a single static connection
            if self.url.startswith("sqlite") and _is_memory_sqlite(self.url):
                return create_async_engine(self.url, **engine_kwargs)
            return create_async_engine(
                self.url,
                pool_size=self.settings.DATABASE_POOL_SIZE,
                max_overflow=self.settings.DATABASE_MAX_OVERFLOW,
                pool_timeout=self.settings.DATABASE_POOL_TIMEOUT,
                pool_recycle=1800,      # Recycle connections every 30 min
                **engine_kwargs,
            )
        except (sa_exc.ArgumentError, sa_exc.NoSuchModuleError, ImportError) as e:
            raise DatabaseConnectionError(f"Failed to create database pool: {e}") from e

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    async def initialize(self) -> None:
        """Build the pool and run pending migrations, once."""
        if self._initialized:
            return
        async with self._lock:
            if self._initialized:
                return
            logger.info("Initializing database")
            engine = self.engine
            if self.settings.RUN_MIGRATIONS:
                await self._run_migrations(engine)
            self._initialized = True

    async def _run_migrations(self, engine: AsyncEngine) -> None:
        conn = await _checkout(engine)
        try:
            async with conn.begin():
                await conn.run_sync(_upgrade_to_head)
        except Exception as e:
            # Proceeding against a stale schema is never attempted
            logger.exception("Database migration failed")
            raise MigrationError(f"Database migration failed: {e}") from e
        finally:
            await conn.close()
        logger.info("Database schema is up to date")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Check out a pooled connection."""
        await self.initialize()
        conn = await _checkout(self.engine)
        try:
            yield conn
        finally:
            await conn.close()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session on one pooled connection; commits on success, rolls back on error."""
        async with self.connection() as conn:
            async with AsyncSession(bind=conn, expire_on_commit=False, autoflush=False) as session:
                try:
                    yield session
                    await session.commit()
                except sa_exc.SQLAlchemyError as e:
                    await session.rollback()
                    raise translate_db_error(e) from e
                except Exception:
                    await session.rollback()
                    raise

    # Multi-statement units of work share the same commit/rollback boundary
    transaction = session

    async def dispose(self) -> None:
        """Close every pooled connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
        self._initialized = False
