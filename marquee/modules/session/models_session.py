from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marquee.types.sqlalchemy import Base

if TYPE_CHECKING:
    from marquee.modules.cinema.models_cinema import Cinema
    from marquee.modules.movie.models_movie import Movie


class Session(Base):
    """A screening of a movie in a cinema, identified by the (movie, cinema) pair"""

    __tablename__ = "movie_session"

    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movie.id"),
        primary_key=True,
    )
    cinema_id: Mapped[int] = mapped_column(
        ForeignKey("cinema.id"),
        primary_key=True,
    )
    movie: Mapped["Movie"] = relationship(
        "Movie",
        back_populates="sessions",
        init=False,
    )
    cinema: Mapped["Cinema"] = relationship(
        "Cinema",
        back_populates="sessions",
        init=False,
    )
