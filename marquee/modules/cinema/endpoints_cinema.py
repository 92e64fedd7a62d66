from fastapi import Depends, HTTPException, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.dependencies import get_db, get_page_size
from marquee.modules.cinema import cruds_cinema, mappers_cinema, schemas_cinema
from marquee.modules.cinema.factory_cinema import CinemaFactory
from marquee.types.module import Module
from marquee.types.sqlalchemy import INTEGER_MAX
from marquee.utils.json_patch import PatchOperation
from marquee.utils.tools import patch_model

module = Module(
    tag="Cinema",
    factory=CinemaFactory(),
)


@module.router.get(
    "/cinemas",
    response_model=list[schemas_cinema.CinemaComplete],
    status_code=200,
)
async def read_cinemas(
    skip: int = Query(default=0, ge=0, le=INTEGER_MAX),
    take: int | None = Query(default=None, ge=0, le=INTEGER_MAX),
    db: AsyncSession = Depends(get_db),
    page_size: int = Depends(get_page_size),
):
    cinemas = await cruds_cinema.get_cinemas(
        skip=skip,
        take=page_size if take is None else take,
        db=db,
    )
    return [mappers_cinema.cinema_model_to_complete(cinema) for cinema in cinemas]


@module.router.get(
    "/cinemas/{cinema_id}",
    response_model=schemas_cinema.CinemaComplete,
    status_code=200,
)
async def read_cinema(
    cinema_id: int,
    db: AsyncSession = Depends(get_db),
):
    cinema = await cruds_cinema.get_cinema_by_id(cinema_id=cinema_id, db=db)
    if cinema is None:
        raise HTTPException(status_code=404, detail="Cinema not found")
    return mappers_cinema.cinema_model_to_complete(cinema)


@module.router.post(
    "/cinemas",
    response_model=schemas_cinema.CinemaComplete,
    status_code=201,
)
async def create_cinema(
    cinema: schemas_cinema.CinemaBase,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a cinema along with its address
    """
    db_cinema = await cruds_cinema.create_cinema(cinema=cinema, db=db)
    response.headers["Location"] = str(
        request.url_for("read_cinema", cinema_id=db_cinema.id),
    )
    return mappers_cinema.cinema_model_to_complete(db_cinema)


@module.router.put(
    "/cinemas/{cinema_id}",
    status_code=204,
)
async def update_cinema(
    cinema_id: int,
    cinema_update: schemas_cinema.CinemaUpdate,
    db: AsyncSession = Depends(get_db),
):
    cinema = await cruds_cinema.get_cinema_by_id(cinema_id=cinema_id, db=db)
    if cinema is None:
        raise HTTPException(status_code=404, detail="Cinema not found")

    await cruds_cinema.update_cinema(
        cinema=cinema,
        cinema_update=cinema_update,
        db=db,
    )


@module.router.patch(
    "/cinemas/{cinema_id}",
    status_code=204,
)
async def patch_cinema(
    cinema_id: int,
    operations: list[PatchOperation],
    db: AsyncSession = Depends(get_db),
):
    """
    Edit a cinema with a JSON Patch document. Its address can be edited with pointers like `/address/street`
    """
    cinema = await cruds_cinema.get_cinema_by_id(cinema_id=cinema_id, db=db)
    if cinema is None:
        raise HTTPException(status_code=404, detail="Cinema not found")

    cinema_update = patch_model(
        mappers_cinema.cinema_model_to_update(cinema),
        operations,
    )
    await cruds_cinema.update_cinema(
        cinema=cinema,
        cinema_update=cinema_update,
        db=db,
    )


@module.router.delete(
    "/cinemas/{cinema_id}",
    status_code=204,
)
async def delete_cinema(
    cinema_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a cinema and its address
    """
    cinema = await cruds_cinema.get_cinema_by_id(cinema_id=cinema_id, db=db)
    if cinema is None:
        raise HTTPException(status_code=404, detail="Cinema not found")
    if cinema.sessions:
        raise HTTPException(
            status_code=409,
            detail="The cinema still has sessions and can not be deleted",
        )

    await cruds_cinema.delete_cinema(cinema=cinema, db=db)
