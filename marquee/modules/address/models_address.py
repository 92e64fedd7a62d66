from sqlalchemy.orm import Mapped, mapped_column

from marquee.types.sqlalchemy import Base


class Address(Base):
    __tablename__ = "address"

    # Assigned by the database on insert
    id: Mapped[int] = mapped_column(primary_key=True, init=False)
    street: Mapped[str]
    number: Mapped[int]
