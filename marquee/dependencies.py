"""
FastAPI [dependencies](https://fastapi.tiangolo.com/tutorial/dependencies/) shared by the endpoints:
```python
async def read_movie(movie_id: int, db: AsyncSession = Depends(get_db)):
```

Tests override `init_app_state` and `get_settings` with `app.dependency_overrides`.
"""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated, cast

import starlette.datastructures
from fastapi import Depends, FastAPI, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.core.utils.config import Settings, construct_prod_settings
from marquee.types.exceptions import InvalidAppStateTypeError
from marquee.utils.state import (
    LifespanState,
    RuntimeLifespanState,
    disconnect_engine,
    init_engine,
    init_SessionLocal,
)


async def init_app_state(
    app: FastAPI,
    settings: Settings,
    marquee_error_logger: logging.Logger,
) -> LifespanState:
    """
    Create the database engine and session maker yielded by the lifespan.

    The lifespan resolves this function through `app.dependency_overrides` so that tests can use their own engine.
    """
    engine = init_engine(settings=settings)
    marquee_error_logger.info("Startup: Database engine initialized")

    return LifespanState(
        engine=engine,
        SessionLocal=init_SessionLocal(engine),
    )


async def disconnect_state(
    state: LifespanState,
    marquee_error_logger: logging.Logger,
) -> None:
    await disconnect_engine(state["engine"])
    marquee_error_logger.info("Shutdown: Database engine disposed")


def get_app_state(request: Request) -> RuntimeLifespanState:
    """
    Starlette copies the lifespan state in every request. Our logging middleware adds the request id to it.
    """
    if isinstance(request.state, starlette.datastructures.State):
        return cast("RuntimeLifespanState", request.state.__dict__["_state"])
    raise InvalidAppStateTypeError


AppState = Annotated[RuntimeLifespanState, Depends(get_app_state)]


@lru_cache
def get_settings() -> Settings:
    """
    Settings read from `config.yaml` and `.env`, built once.
    See https://fastapi.tiangolo.com/advanced/settings/#lru_cache-technical-details
    """
    return construct_prod_settings()


async def get_db(state: AppState) -> AsyncGenerator[AsyncSession, None]:
    """
    A database session committed at the end of the request.

    An `HTTPException` is an answer the endpoint chose to give: changes made before it are committed.
    Any other exception rolls the session back.

    Cruds call `await db.flush()` to send their changes, never `commit` or `rollback`.
    """
    async with state["SessionLocal"]() as db:
        try:
            yield db
        except HTTPException:
            await db.commit()
            raise
        except Exception:
            await db.rollback()
            raise
        else:
            await db.commit()


def get_page_size(
    settings: Settings = Depends(get_settings),
) -> int:
    """
    Number of items listing endpoints return when the `take` query parameter is omitted
    """
    return settings.DEFAULT_PAGE_SIZE
