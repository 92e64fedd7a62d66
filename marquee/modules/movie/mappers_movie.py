from marquee.modules.movie import models_movie, schemas_movie
from marquee.modules.session.mappers_session import session_model_to_schema


def movie_base_to_model(movie: schemas_movie.MovieBase) -> models_movie.Movie:
    return models_movie.Movie(
        title=movie.title,
        genre=movie.genre,
        duration=movie.duration,
    )


def movie_model_to_complete(
    movie: models_movie.Movie,
) -> schemas_movie.MovieComplete:
    return schemas_movie.MovieComplete(
        id=movie.id,
        title=movie.title,
        genre=movie.genre,
        duration=movie.duration,
        sessions=[session_model_to_schema(session) for session in movie.sessions],
    )


def movie_model_to_update(movie: models_movie.Movie) -> schemas_movie.MovieUpdate:
    return schemas_movie.MovieUpdate(
        title=movie.title,
        genre=movie.genre,
        duration=movie.duration,
    )


def apply_movie_update(
    movie: models_movie.Movie,
    movie_update: schemas_movie.MovieUpdate,
) -> None:
    """Overwrite every mutable field of `movie`"""
    movie.title = movie_update.title
    movie.genre = movie_update.genre
    movie.duration = movie_update.duration
