from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.modules.cinema import models_cinema
from marquee.modules.movie import mappers_movie, models_movie, schemas_movie
from marquee.modules.session import models_session
from marquee.utils.tools import is_storable_id


async def get_movies(
    skip: int,
    take: int,
    db: AsyncSession,
    cinema_name: str | None = None,
) -> Sequence[models_movie.Movie]:
    """
    Return a page of movies ordered by id.

    If `cinema_name` is provided, only movies screened in a cinema named exactly `cinema_name` are returned.
    The filter is applied before the pagination.
    """
    query = select(models_movie.Movie)
    if cinema_name is not None:
        query = query.where(
            models_movie.Movie.sessions.any(
                models_session.Session.cinema.has(
                    models_cinema.Cinema.name == cinema_name,
                ),
            ),
        )
    result = await db.execute(
        query.order_by(models_movie.Movie.id).offset(skip).limit(take),
    )
    return result.scalars().all()


async def get_movie_by_id(
    movie_id: int,
    db: AsyncSession,
) -> models_movie.Movie | None:
    if not is_storable_id(movie_id):
        return None
    result = await db.execute(
        select(models_movie.Movie).where(models_movie.Movie.id == movie_id),
    )
    return result.scalars().first()


async def create_movie(
    movie: schemas_movie.MovieBase,
    db: AsyncSession,
) -> models_movie.Movie:
    db_movie = mappers_movie.movie_base_to_model(movie)
    db.add(db_movie)
    await db.flush()
    return db_movie


async def update_movie(
    movie: models_movie.Movie,
    movie_update: schemas_movie.MovieUpdate,
    db: AsyncSession,
) -> None:
    mappers_movie.apply_movie_update(movie, movie_update)
    await db.flush()


async def delete_movie(movie: models_movie.Movie, db: AsyncSession) -> None:
    await db.delete(movie)
    await db.flush()
