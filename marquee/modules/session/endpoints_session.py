from fastapi import Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.dependencies import get_db
from marquee.modules.session import cruds_session, mappers_session, schemas_session
from marquee.modules.session.factory_session import SessionFactory
from marquee.types.module import Module

module = Module(
    tag="Session",
    factory=SessionFactory(),
)


@module.router.get(
    "/sessions",
    response_model=list[schemas_session.SessionBase],
    status_code=200,
)
async def read_sessions(
    db: AsyncSession = Depends(get_db),
):
    sessions = await cruds_session.get_sessions(db=db)
    return [mappers_session.session_model_to_schema(session) for session in sessions]


@module.router.get(
    "/sessions/{movie_id}/{cinema_id}",
    response_model=schemas_session.SessionBase,
    status_code=200,
)
async def read_session(
    movie_id: int,
    cinema_id: int,
    db: AsyncSession = Depends(get_db),
):
    session = await cruds_session.get_session_by_ids(
        movie_id=movie_id,
        cinema_id=cinema_id,
        db=db,
    )
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return mappers_session.session_model_to_schema(session)


@module.router.post(
    "/sessions",
    response_model=schemas_session.SessionBase,
    status_code=201,
)
async def create_session(
    session: schemas_session.SessionBase,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """
    Schedule a movie in a cinema.

    The movie and the cinema must exist and the session must not already exist, otherwise the database rejects it.
    """
    db_session = await cruds_session.create_session(session=session, db=db)
    response.headers["Location"] = str(
        request.url_for(
            "read_session",
            movie_id=db_session.movie_id,
            cinema_id=db_session.cinema_id,
        ),
    )
    return mappers_session.session_model_to_schema(db_session)
