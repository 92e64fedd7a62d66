from sqlalchemy.ext.asyncio import AsyncSession

from marquee.core.utils.config import Settings
from marquee.modules.cinema import cruds_cinema
from marquee.modules.cinema.factory_cinema import CinemaFactory
from marquee.modules.movie import cruds_movie
from marquee.modules.movie.factory_movie import MovieFactory
from marquee.modules.session import cruds_session, schemas_session
from marquee.types.factory import Factory


class SessionFactory(Factory):
    depends_on = [MovieFactory, CinemaFactory]

    @classmethod
    async def run(cls, db: AsyncSession, settings: Settings) -> None:
        movies = await cruds_movie.get_movies(
            skip=0,
            take=settings.DEFAULT_PAGE_SIZE,
            db=db,
        )
        cinemas = await cruds_cinema.get_cinemas(
            skip=0,
            take=settings.DEFAULT_PAGE_SIZE,
            db=db,
        )
        # Every cinema screens every other movie, starting with a different one
        for i, cinema in enumerate(cinemas):
            for movie in movies[i % 2 :: 2]:
                await cruds_session.create_session(
                    session=schemas_session.SessionBase(
                        movie_id=movie.id,
                        cinema_id=cinema.id,
                    ),
                    db=db,
                )

    @classmethod
    async def should_run(cls, db: AsyncSession):
        return len(await cruds_session.get_sessions(db=db)) == 0
