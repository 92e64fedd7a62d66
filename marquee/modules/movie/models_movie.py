from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marquee.types.sqlalchemy import Base

if TYPE_CHECKING:
    from marquee.modules.session.models_session import Session


class Movie(Base):
    __tablename__ = "movie"

    # Assigned by the database on insert
    id: Mapped[int] = mapped_column(primary_key=True, init=False)
    title: Mapped[str]
    genre: Mapped[str] = mapped_column(String(50))
    # Duration in minutes
    duration: Mapped[int]
    sessions: Mapped[list["Session"]] = relationship(
        "Session",
        lazy="selectin",
        back_populates="movie",
        default_factory=list,
    )
