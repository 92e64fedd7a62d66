from marquee.modules.address.mappers_address import (
    address_base_to_model,
    address_model_to_complete,
    address_model_to_update,
    apply_address_update,
)
from marquee.modules.cinema import models_cinema, schemas_cinema
from marquee.modules.session.mappers_session import session_model_to_schema


def cinema_base_to_model(cinema: schemas_cinema.CinemaBase) -> models_cinema.Cinema:
    """
    Build a cinema and the address it owns. Both will be inserted when the cinema is added to the database
    """
    return models_cinema.Cinema(
        name=cinema.name,
        address=address_base_to_model(cinema.address),
    )


def cinema_model_to_complete(
    cinema: models_cinema.Cinema,
) -> schemas_cinema.CinemaComplete:
    return schemas_cinema.CinemaComplete(
        id=cinema.id,
        name=cinema.name,
        address=address_model_to_complete(cinema.address),
        sessions=[session_model_to_schema(session) for session in cinema.sessions],
    )


def cinema_model_to_update(
    cinema: models_cinema.Cinema,
) -> schemas_cinema.CinemaUpdate:
    return schemas_cinema.CinemaUpdate(
        name=cinema.name,
        address=address_model_to_update(cinema.address),
    )


def apply_cinema_update(
    cinema: models_cinema.Cinema,
    cinema_update: schemas_cinema.CinemaUpdate,
) -> None:
    """Overwrite every mutable field of `cinema` and of the address it owns"""
    cinema.name = cinema_update.name
    apply_address_update(cinema.address, cinema_update.address)
