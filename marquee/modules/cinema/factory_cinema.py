from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.core.utils.config import Settings
from marquee.modules.address import schemas_address
from marquee.modules.cinema import cruds_cinema, schemas_cinema
from marquee.types.factory import Factory

faker = Faker("fr_FR")


class CinemaFactory(Factory):
    depends_on = []

    @classmethod
    async def run(cls, db: AsyncSession, settings: Settings) -> None:
        for _ in range(3):
            await cruds_cinema.create_cinema(
                cinema=schemas_cinema.CinemaBase(
                    name=f"Cinéma {faker.last_name()}",
                    address=schemas_address.AddressBase(
                        street=faker.street_name(),
                        number=faker.random_int(min=1, max=200),
                    ),
                ),
                db=db,
            )

    @classmethod
    async def should_run(cls, db: AsyncSession):
        return len(await cruds_cinema.get_cinemas(skip=0, take=1, db=db)) == 0
