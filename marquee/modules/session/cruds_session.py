from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.modules.session import mappers_session, models_session, schemas_session
from marquee.utils.tools import is_storable_id


async def get_sessions(db: AsyncSession) -> Sequence[models_session.Session]:
    result = await db.execute(
        select(models_session.Session).order_by(
            models_session.Session.movie_id,
            models_session.Session.cinema_id,
        ),
    )
    return result.scalars().all()


async def get_session_by_ids(
    movie_id: int,
    cinema_id: int,
    db: AsyncSession,
) -> models_session.Session | None:
    if not (is_storable_id(movie_id) and is_storable_id(cinema_id)):
        return None
    result = await db.execute(
        select(models_session.Session).where(
            models_session.Session.movie_id == movie_id,
            models_session.Session.cinema_id == cinema_id,
        ),
    )
    return result.scalars().first()


async def create_session(
    session: schemas_session.SessionBase,
    db: AsyncSession,
) -> models_session.Session:
    """
    Referenced movie and cinema are not checked, the database foreign keys reject missing ones.
    An `IntegrityError` is raised if they do not exist or if the session already exists.
    """
    db_session = mappers_session.session_base_to_model(session)
    db.add(db_session)
    await db.flush()
    return db_session
