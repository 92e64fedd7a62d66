from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.modules.cinema import mappers_cinema, models_cinema, schemas_cinema
from marquee.utils.tools import is_storable_id


async def get_cinemas(
    skip: int,
    take: int,
    db: AsyncSession,
) -> Sequence[models_cinema.Cinema]:
    result = await db.execute(
        select(models_cinema.Cinema)
        .order_by(models_cinema.Cinema.id)
        .offset(skip)
        .limit(take),
    )
    return result.scalars().all()


async def get_cinema_by_id(
    cinema_id: int,
    db: AsyncSession,
) -> models_cinema.Cinema | None:
    if not is_storable_id(cinema_id):
        return None
    result = await db.execute(
        select(models_cinema.Cinema).where(models_cinema.Cinema.id == cinema_id),
    )
    return result.scalars().first()


async def create_cinema(
    cinema: schemas_cinema.CinemaBase,
    db: AsyncSession,
) -> models_cinema.Cinema:
    db_cinema = mappers_cinema.cinema_base_to_model(cinema)
    db.add(db_cinema)
    await db.flush()
    return db_cinema


async def update_cinema(
    cinema: models_cinema.Cinema,
    cinema_update: schemas_cinema.CinemaUpdate,
    db: AsyncSession,
) -> None:
    mappers_cinema.apply_cinema_update(cinema, cinema_update)
    await db.flush()


async def delete_cinema(cinema: models_cinema.Cinema, db: AsyncSession) -> None:
    """Delete the cinema and the address it owns"""
    await db.delete(cinema)
    await db.delete(cinema.address)
    await db.flush()
