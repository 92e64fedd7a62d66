from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.core.utils.config import Settings
from marquee.modules.movie import cruds_movie, schemas_movie
from marquee.types.factory import Factory

faker = Faker("fr_FR")

GENRES = ["Action", "Comedy", "Drama", "Horror", "Animation", "Documentary"]


class MovieFactory(Factory):
    depends_on = []

    @classmethod
    async def run(cls, db: AsyncSession, settings: Settings) -> None:
        for _ in range(6):
            await cruds_movie.create_movie(
                movie=schemas_movie.MovieBase(
                    title=faker.sentence(nb_words=3).rstrip("."),
                    genre=faker.random_element(GENRES),
                    duration=faker.random_int(min=75, max=180),
                ),
                db=db,
            )

    @classmethod
    async def should_run(cls, db: AsyncSession):
        return len(await cruds_movie.get_movies(skip=0, take=1, db=db)) == 0
