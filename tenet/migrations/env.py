"""Alembic migration environment.

Runs against a connection handed over through ``config.attributes`` when
invoked by ``Database.initialize()``, or builds its own engine from the
TENET_* settings when run from the alembic command line.
"""

from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from tenet.core.config import get_settings
from tenet.core.database import Base, normalize_sync_database_url
from tenet.models import TenantRow, UserRow, StorageRow, ApplicationRow, RoleRow  # noqa: F401

config = context.config

# Logging config (command line only)
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _command_line_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    return normalize_sync_database_url(get_settings().database_url)


def run_migrations_offline() -> None:
    context.configure(
        url=_command_line_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()
        return

    config.set_main_option("sqlalchemy.url", _command_line_url())
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
