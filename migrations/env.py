import asyncio
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncConnection

from marquee.dependencies import get_settings
from marquee.types.sqlalchemy import Base
from marquee.utils.state import get_database_url, init_engine

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config


# Interpret the config file for Python logging.
if config.config_file_name is not None:
    # Don't disable existing loggers
    # See https://stackoverflow.com/questions/42427487/using-alembic-config-main-redirects-log-output
    fileConfig(config.config_file_name, disable_existing_loggers=False)


target_metadata = Base.metadata

# This allows alembic to find our models and take them into account when generating migrations (do not remove)
for models_file in sorted(Path().glob("marquee/**/models_*.py")):
    __import__(".".join(models_file.with_suffix("").parts))


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    This configures the context with just a URL
    and not an Engine. Calls to context.execute() here emit the given string to the
    script output.
    """
    url = get_database_url(get_settings())
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # SQLite can not alter tables in place, alembic needs to recreate them
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def create_async_engine_and_run_async_migrations() -> None:
    """
    In this scenario we need to create an AsyncEngine and then obtain a AsyncConnection from it.
    """

    # If we don't have a connection, we can safely assume that Marquee is not running
    # Migrations should have been called from the CLI. We thus want to point to the production database
    settings = get_settings()
    connectable = init_engine(settings)

    async with connectable.connect() as connection:
        await run_async_migrations(connection)
    await connectable.dispose()


async def run_async_migrations(connection: AsyncConnection) -> None:
    # SQLAlchemy does not support `Inspection on an AsyncConnection`. The call to Alembic must be wrapped in a `run_sync` call.
    # See https://alembic.sqlalchemy.org/en/latest/cookbook.html#programmatic-api-use-connection-sharing-with-asyncio
    await connection.run_sync(do_run_migrations)


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode.

    If no connection is provided, alembic was invoked from the CLI: we create an engine pointing to the production settings
    and run the migrations in a new event loop.

    When Marquee invokes alembic at startup, it passes its synchronous connection in the `connection` attribute:
    See https://alembic.sqlalchemy.org/en/latest/cookbook.html#connection-sharing
    """

    connection: None | Connection | AsyncConnection = config.attributes.get(
        "connection",
        None,
    )

    if connection is None:
        asyncio.run(create_async_engine_and_run_async_migrations())
    elif isinstance(connection, AsyncConnection):
        asyncio.run(run_async_migrations(connection))
    elif isinstance(connection, Connection):
        do_run_migrations(connection)
    else:
        raise TypeError(  # noqa: TRY003
            f"Unsupported connection object {connection}. A Connection or and AsyncConnection is required, got a {type(connection)}",
        )


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
