from fastapi import Depends, HTTPException, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.dependencies import get_db, get_page_size
from marquee.modules.movie import cruds_movie, mappers_movie, schemas_movie
from marquee.modules.movie.factory_movie import MovieFactory
from marquee.types.module import Module
from marquee.types.sqlalchemy import INTEGER_MAX
from marquee.utils.json_patch import PatchOperation
from marquee.utils.tools import patch_model

module = Module(
    tag="Movie",
    factory=MovieFactory(),
)


@module.router.get(
    "/movies",
    response_model=list[schemas_movie.MovieComplete],
    status_code=200,
)
async def read_movies(
    skip: int = Query(default=0, ge=0, le=INTEGER_MAX),
    take: int | None = Query(default=None, ge=0, le=INTEGER_MAX),
    cinema_name: str | None = Query(default=None, alias="nomeCinema"),
    db: AsyncSession = Depends(get_db),
    page_size: int = Depends(get_page_size),
):
    """
    Return movies ordered by id.

    **nomeCinema**: only return movies that have a session in the cinema with this exact name
    """
    movies = await cruds_movie.get_movies(
        skip=skip,
        take=page_size if take is None else take,
        cinema_name=cinema_name,
        db=db,
    )
    return [mappers_movie.movie_model_to_complete(movie) for movie in movies]


@module.router.get(
    "/movies/{movie_id}",
    response_model=schemas_movie.MovieComplete,
    status_code=200,
)
async def read_movie(
    movie_id: int,
    db: AsyncSession = Depends(get_db),
):
    movie = await cruds_movie.get_movie_by_id(movie_id=movie_id, db=db)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return mappers_movie.movie_model_to_complete(movie)


@module.router.post(
    "/movies",
    response_model=schemas_movie.MovieComplete,
    status_code=201,
)
async def create_movie(
    movie: schemas_movie.MovieBase,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    db_movie = await cruds_movie.create_movie(movie=movie, db=db)
    response.headers["Location"] = str(
        request.url_for("read_movie", movie_id=db_movie.id),
    )
    return mappers_movie.movie_model_to_complete(db_movie)


@module.router.put(
    "/movies/{movie_id}",
    status_code=204,
)
async def update_movie(
    movie_id: int,
    movie_update: schemas_movie.MovieUpdate,
    db: AsyncSession = Depends(get_db),
):
    movie = await cruds_movie.get_movie_by_id(movie_id=movie_id, db=db)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")

    await cruds_movie.update_movie(movie=movie, movie_update=movie_update, db=db)


@module.router.patch(
    "/movies/{movie_id}",
    status_code=204,
)
async def patch_movie(
    movie_id: int,
    operations: list[PatchOperation],
    db: AsyncSession = Depends(get_db),
):
    """
    Edit a movie with a [JSON Patch](https://datatracker.ietf.org/doc/html/rfc6902) document:
    ```json
    [{"op": "replace", "path": "/title", "value": "Aliens"}]
    ```
    """
    movie = await cruds_movie.get_movie_by_id(movie_id=movie_id, db=db)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")

    movie_update = patch_model(mappers_movie.movie_model_to_update(movie), operations)
    await cruds_movie.update_movie(movie=movie, movie_update=movie_update, db=db)


@module.router.delete(
    "/movies/{movie_id}",
    status_code=204,
)
async def delete_movie(
    movie_id: int,
    db: AsyncSession = Depends(get_db),
):
    movie = await cruds_movie.get_movie_by_id(movie_id=movie_id, db=db)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    if movie.sessions:
        raise HTTPException(
            status_code=409,
            detail="The movie still has sessions and can not be deleted",
        )

    await cruds_movie.delete_movie(movie=movie, db=db)
