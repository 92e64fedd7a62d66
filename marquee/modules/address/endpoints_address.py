from fastapi import Depends, HTTPException, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.dependencies import get_db, get_page_size
from marquee.modules.address import cruds_address, mappers_address, schemas_address
from marquee.types.module import Module
from marquee.types.sqlalchemy import INTEGER_MAX
from marquee.utils.json_patch import PatchOperation
from marquee.utils.tools import patch_model

# Addresses are created along with cinemas by the cinema factory
module = Module(
    tag="Address",
    factory=None,
)


@module.router.get(
    "/addresses",
    response_model=list[schemas_address.AddressComplete],
    status_code=200,
)
async def read_addresses(
    skip: int = Query(default=0, ge=0, le=INTEGER_MAX),
    take: int | None = Query(default=None, ge=0, le=INTEGER_MAX),
    db: AsyncSession = Depends(get_db),
    page_size: int = Depends(get_page_size),
):
    addresses = await cruds_address.get_addresses(
        skip=skip,
        take=page_size if take is None else take,
        db=db,
    )
    return [mappers_address.address_model_to_complete(address) for address in addresses]


@module.router.get(
    "/addresses/{address_id}",
    response_model=schemas_address.AddressComplete,
    status_code=200,
)
async def read_address(
    address_id: int,
    db: AsyncSession = Depends(get_db),
):
    address = await cruds_address.get_address_by_id(address_id=address_id, db=db)
    if address is None:
        raise HTTPException(status_code=404, detail="Address not found")
    return mappers_address.address_model_to_complete(address)


@module.router.post(
    "/addresses",
    response_model=schemas_address.AddressComplete,
    status_code=201,
)
async def create_address(
    address: schemas_address.AddressBase,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    db_address = await cruds_address.create_address(address=address, db=db)
    response.headers["Location"] = str(
        request.url_for("read_address", address_id=db_address.id),
    )
    return mappers_address.address_model_to_complete(db_address)


@module.router.put(
    "/addresses/{address_id}",
    status_code=204,
)
async def update_address(
    address_id: int,
    address_update: schemas_address.AddressUpdate,
    db: AsyncSession = Depends(get_db),
):
    address = await cruds_address.get_address_by_id(address_id=address_id, db=db)
    if address is None:
        raise HTTPException(status_code=404, detail="Address not found")

    await cruds_address.update_address(
        address=address,
        address_update=address_update,
        db=db,
    )


@module.router.patch(
    "/addresses/{address_id}",
    status_code=204,
)
async def patch_address(
    address_id: int,
    operations: list[PatchOperation],
    db: AsyncSession = Depends(get_db),
):
    address = await cruds_address.get_address_by_id(address_id=address_id, db=db)
    if address is None:
        raise HTTPException(status_code=404, detail="Address not found")

    address_update = patch_model(
        mappers_address.address_model_to_update(address),
        operations,
    )
    await cruds_address.update_address(
        address=address,
        address_update=address_update,
        db=db,
    )


@module.router.delete(
    "/addresses/{address_id}",
    status_code=204,
)
async def delete_address(
    address_id: int,
    db: AsyncSession = Depends(get_db),
):
    address = await cruds_address.get_address_by_id(address_id=address_id, db=db)
    if address is None:
        raise HTTPException(status_code=404, detail="Address not found")
    if await cruds_address.is_address_owned(address_id=address_id, db=db):
        raise HTTPException(
            status_code=409,
            detail="The address belongs to a cinema and can not be deleted",
        )

    await cruds_address.delete_address(address=address, db=db)
