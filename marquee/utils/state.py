from typing import Any, TypedDict

from sqlalchemy import Engine, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from marquee.core.utils.config import Settings
from marquee.types.sqlalchemy import SessionLocalType


class LifespanState(TypedDict):
    """
    The LifespanState is yielded by the application lifespan. Starlette copies it in the state of every request.
    Use dependencies to access it
    """

    # Database engine
    engine: AsyncEngine
    # Database session creator
    SessionLocal: SessionLocalType


class RuntimeLifespanState(LifespanState):
    """
    Requests contains an extended version of the LifespanState for each request.
    """

    request_id: str


def get_database_url(settings: Settings) -> str:
    if settings.SQLITE_DB:
        return f"sqlite+aiosqlite:///./{settings.SQLITE_DB}"
    return f"postgresql+asyncpg://{settings.POSTGRES_USER}:{settings.POSTGRES_PASSWORD}@{settings.POSTGRES_HOST}/{settings.POSTGRES_DB}"


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    SQLite does not enforce foreign keys unless asked to, for every new connection.
    See https://docs.sqlalchemy.org/en/20/dialects/sqlite.html#foreign-key-support

    For an AsyncEngine, the listener must be registered on `engine.sync_engine`
    """

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_engine(settings: Settings) -> AsyncEngine:
    """
    Return the (asynchronous) database engine, based on the settings
    """

    engine = create_async_engine(
        get_database_url(settings),
        echo=settings.DATABASE_DEBUG,
    )
    if settings.SQLITE_DB:
        enable_sqlite_foreign_keys(engine.sync_engine)

    return engine


def init_SessionLocal(engine: AsyncEngine) -> SessionLocalType:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def disconnect_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
