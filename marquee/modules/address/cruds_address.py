from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.modules.address import mappers_address, models_address, schemas_address
from marquee.modules.cinema import models_cinema
from marquee.utils.tools import is_storable_id


async def get_addresses(
    skip: int,
    take: int,
    db: AsyncSession,
) -> Sequence[models_address.Address]:
    result = await db.execute(
        select(models_address.Address)
        .order_by(models_address.Address.id)
        .offset(skip)
        .limit(take),
    )
    return result.scalars().all()


async def get_address_by_id(
    address_id: int,
    db: AsyncSession,
) -> models_address.Address | None:
    if not is_storable_id(address_id):
        return None
    result = await db.execute(
        select(models_address.Address).where(
            models_address.Address.id == address_id,
        ),
    )
    return result.scalars().first()


async def is_address_owned(address_id: int, db: AsyncSession) -> bool:
    """Return True if a cinema is located at this address"""
    result = await db.execute(
        select(models_cinema.Cinema.id).where(
            models_cinema.Cinema.address_id == address_id,
        ),
    )
    return result.scalars().first() is not None


async def create_address(
    address: schemas_address.AddressBase,
    db: AsyncSession,
) -> models_address.Address:
    db_address = mappers_address.address_base_to_model(address)
    db.add(db_address)
    await db.flush()
    return db_address


async def update_address(
    address: models_address.Address,
    address_update: schemas_address.AddressUpdate,
    db: AsyncSession,
) -> None:
    mappers_address.apply_address_update(address, address_update)
    await db.flush()


async def delete_address(address: models_address.Address, db: AsyncSession) -> None:
    await db.delete(address)
    await db.flush()
