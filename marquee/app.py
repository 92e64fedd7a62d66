"""File defining the Metadata. And the basic functions creating the database tables and calling the router"""

import logging
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

import alembic.command as alembic_command
import alembic.config as alembic_config
import alembic.migration as alembic_migration
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy.engine import Connection, Engine

from marquee import api
from marquee.core.utils.config import Settings
from marquee.core.utils.log import LogConfig, request_id_context
from marquee.dependencies import disconnect_state, init_app_state
from marquee.module import all_modules
from marquee.types.exceptions import (
    ContentHTTPException,
    FactoryDependencyCycleError,
    ValidationProblemException,
)
from marquee.types.factory import Factory
from marquee.types.sqlalchemy import Base
from marquee.utils import initialization
from marquee.utils.state import LifespanState
from marquee.utils.tools import format_validation_errors

# NOTE: We can not get loggers at the top of this file like we do in other files
# as the loggers are not yet initialized


def get_alembic_config(connection: Connection) -> alembic_config.Config:
    """
    Return the alembic configuration object in a synchronous way
    """
    alembic_cfg = alembic_config.Config("alembic.ini")
    alembic_cfg.attributes["connection"] = connection

    return alembic_cfg


def get_alembic_current_revision(connection: Connection) -> str | None:
    """
    Return the current revision of the database in a synchronous way

    NOTE: SQLAlchemy does not support `Inspection on an AsyncConnection`. If you have an AsyncConnection, the call to this method must be wrapped in a `run_sync` call to obtain a Connection.
    """

    context = alembic_migration.MigrationContext.configure(connection)
    return context.get_current_revision()


def stamp_alembic_head(connection: Connection) -> None:
    """
    Stamp the database with the latest revision in a synchronous way
    """
    alembic_cfg = get_alembic_config(connection)
    alembic_command.stamp(alembic_cfg, "head")


def run_alembic_upgrade(connection: Connection) -> None:
    """
    Run the alembic upgrade command to upgrade the database to the latest version (`head`) in a synchronous way

    WARNING: SQLAlchemy does not support `Inspection on an AsyncConnection`. The call to Alembic must be wrapped in a `run_sync` call.
    See https://alembic.sqlalchemy.org/en/latest/cookbook.html#programmatic-api-use-connection-sharing-with-asyncio for more information.
    """

    alembic_cfg = get_alembic_config(connection)

    alembic_command.upgrade(alembic_cfg, "head")


def update_db_tables(
    sync_engine: Engine,
    marquee_error_logger: logging.Logger,
    drop_db: bool = False,
) -> None:
    """
    If the database is not initialized, create the tables and stamp the database with the latest revision.
    Otherwise, run the alembic upgrade command to upgrade the database to the latest version (`head`).

    if drop_db is True, we will drop all tables before creating them again

    This method requires a synchronous engine
    """

    try:
        with sync_engine.begin() as conn:
            if drop_db:
                initialization.drop_db_sync(conn)

            alembic_current_revision = get_alembic_current_revision(conn)

            if alembic_current_revision is None:
                # We generate the database using SQLAlchemy
                # in order not to have to run all migrations one by one
                # See https://alembic.sqlalchemy.org/en/latest/cookbook.html#building-an-up-to-date-database-from-scratch
                marquee_error_logger.info(
                    "Startup: Database tables not created yet, creating them",
                )

                Base.metadata.create_all(conn)
                # We stamp the database with the latest revision so that
                # alembic knows that the database is up to date
                stamp_alembic_head(conn)
            else:
                marquee_error_logger.info(
                    f"Startup: Database tables already created (current revision: {alembic_current_revision}), running migrations",
                )
                run_alembic_upgrade(conn)

            marquee_error_logger.info("Startup: Database tables updated")
    except Exception as error:
        marquee_error_logger.fatal(
            f"Startup: Could not create tables in the database: {error}",
        )
        raise


def init_db(
    settings: Settings,
    marquee_error_logger: logging.Logger,
    drop_db: bool = False,
) -> None:
    """
    Init the database by creating the tables or running the migrations

    The method will use a synchronous engine to create the tables
    """
    sync_engine = initialization.get_sync_db_engine(settings=settings)

    update_db_tables(
        sync_engine=sync_engine,
        marquee_error_logger=marquee_error_logger,
        drop_db=drop_db,
    )
    sync_engine.dispose()


def sort_factories(factories: list[Factory]) -> list[Factory]:
    """
    Order factories so that each factory comes after the factories it depends on.

    A factory depending on a factory that is not enabled, or a dependency cycle, raises a `FactoryDependencyCycleError`.
    """
    sorted_factories: list[Factory] = []
    ran_factories: list[type[Factory]] = []
    remaining_factories = list(factories)

    while remaining_factories:
        ready_factories = [
            factory
            for factory in remaining_factories
            if all(dependency in ran_factories for dependency in factory.depends_on)
        ]
        if not ready_factories:
            raise FactoryDependencyCycleError(
                [factory.__class__.__name__ for factory in remaining_factories],
            )
        for factory in ready_factories:
            sorted_factories.append(factory)
            ran_factories.append(factory.__class__)
            remaining_factories.remove(factory)

    return sorted_factories


async def run_factories(
    state: LifespanState,
    settings: Settings,
    marquee_error_logger: logging.Logger,
) -> None:
    """
    Fill the database with demo data. Each factory only runs if its tables are empty
    """
    factories = sort_factories(
        [module.factory for module in all_modules if module.factory is not None],
    )

    marquee_error_logger.info("Startup: Running factories")
    async with state["SessionLocal"]() as db:
        for factory in factories:
            if not await factory.should_run(db):
                marquee_error_logger.info(
                    f"Startup: Factory {factory.__class__.__name__} does not need to run",
                )
                continue
            marquee_error_logger.info(
                f"Startup: Running factory {factory.__class__.__name__}",
            )
            await factory.run(db, settings)
            await db.commit()
    marquee_error_logger.info("Startup: Factories ran")


def use_route_path_as_operation_ids(app: FastAPI) -> None:
    """
    Simplify operation IDs so that generated API clients have simpler function names.

    The operation_id will have the format "method_path", like "get_movies_movie_id".

    See https://fastapi.tiangolo.com/advanced/path-operation-advanced-configuration/
    """
    for route in app.routes:
        if isinstance(route, APIRoute):
            # The operation_id should be unique.
            method = "_".join(route.methods)
            route.operation_id = (
                method.lower()
                + route.path.replace("/", "_").replace("{", "").replace("}", "")
            )


# We wrap the application in a function to be able to pass the settings and drop_db parameters
# The drop_db parameter is used to drop the database tables before creating them again
def get_application(settings: Settings, drop_db: bool = False) -> FastAPI:
    # Initialize loggers
    LogConfig().initialize_loggers(settings=settings)

    marquee_access_logger = logging.getLogger("marquee.access")
    marquee_error_logger = logging.getLogger("marquee.error")

    # Creating a lifespan which will be called when the application starts then shuts down
    # https://fastapi.tiangolo.com/advanced/events/
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[LifespanState, None]:
        marquee_error_logger.info("Startup: Initializing application")

        state = await app.dependency_overrides.get(
            init_app_state,
            init_app_state,
        )(
            app=app,
            settings=settings,
            marquee_error_logger=marquee_error_logger,
        )

        init_db(
            settings=settings,
            marquee_error_logger=marquee_error_logger,
            drop_db=drop_db,
        )

        if settings.USE_FACTORIES:
            await run_factories(
                state=state,
                settings=settings,
                marquee_error_logger=marquee_error_logger,
            )

        yield state

        marquee_error_logger.info("Shutting down")
        await disconnect_state(
            state=state,
            marquee_error_logger=marquee_error_logger,
        )

    # Initialize app
    app = FastAPI(
        title="Marquee",
        version=settings.MARQUEE_VERSION,
        lifespan=lifespan,
    )
    app.include_router(api.api_router)
    use_route_path_as_operation_ids(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """
        This middleware is called around each request.
        It logs the request and inject a unique identifier in the request that should be used to associate logs saved during the request.
        """
        # The id is added to every record logged while the request is processed, see `RequestIdFilter`
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        # This should never happen, but we log it just in case
        if request.client is None:
            marquee_error_logger.warning(
                f"Client information not available for {request.url.path}",
            )
            raise HTTPException(status_code=400, detail="No client information")

        client_address = f"{request.client.host}:{request.client.port}"
        request_id_token = request_id_context.set(request_id)

        try:
            response = await call_next(request)

            marquee_access_logger.info(
                f'{client_address} - "{request.method} {request.url.path}" {response.status_code}',
            )
        finally:
            request_id_context.reset(request_id_token)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ):
        # We use a Debug logger to log the error as personal data may be present in the request
        marquee_error_logger.debug(
            f"Validation error: {exc.errors()}",
        )

        problem = ValidationProblemException(format_validation_errors(exc.errors()))
        return JSONResponse(
            status_code=problem.status_code,
            content=jsonable_encoder(problem.content),
        )

    @app.exception_handler(ContentHTTPException)
    async def content_exception_handler(
        request: Request,
        exc: ContentHTTPException,
    ):
        if isinstance(exc, ValidationProblemException):
            marquee_error_logger.debug(
                f"Validation error: {exc.errors}",
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(exc.content),
            headers=exc.headers,
        )

    return app
