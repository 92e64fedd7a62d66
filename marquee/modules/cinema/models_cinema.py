from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marquee.modules.address.models_address import Address
from marquee.types.sqlalchemy import Base

if TYPE_CHECKING:
    from marquee.modules.session.models_session import Session


class Cinema(Base):
    __tablename__ = "cinema"

    # Assigned by the database on insert
    id: Mapped[int] = mapped_column(primary_key=True, init=False)
    name: Mapped[str]
    # A cinema owns its address, an address can not be shared between cinemas
    address_id: Mapped[int] = mapped_column(
        ForeignKey("address.id"),
        unique=True,
        init=False,
    )
    address: Mapped[Address] = relationship(
        Address,
        lazy="joined",
    )
    sessions: Mapped[list["Session"]] = relationship(
        "Session",
        lazy="selectin",
        back_populates="cinema",
        default_factory=list,
    )
