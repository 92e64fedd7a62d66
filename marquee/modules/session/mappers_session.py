from marquee.modules.session import models_session, schemas_session


def session_base_to_model(
    session: schemas_session.SessionBase,
) -> models_session.Session:
    return models_session.Session(
        movie_id=session.movie_id,
        cinema_id=session.cinema_id,
    )


def session_model_to_schema(
    session: models_session.Session,
) -> schemas_session.SessionBase:
    return schemas_session.SessionBase(
        movie_id=session.movie_id,
        cinema_id=session.cinema_id,
    )
