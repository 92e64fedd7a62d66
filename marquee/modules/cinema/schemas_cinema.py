from pydantic import BaseModel, Field

from marquee.modules.address.schemas_address import (
    AddressBase,
    AddressComplete,
    AddressUpdate,
)
from marquee.modules.session.schemas_session import SessionBase


class CinemaBase(BaseModel):
    name: str = Field(min_length=1)
    # The address is created along with the cinema, which owns it
    address: AddressBase


class CinemaUpdate(BaseModel):
    """Every mutable field of a cinema, including its address. Used by both full (PUT) and partial (PATCH) updates"""

    name: str = Field(min_length=1)
    address: AddressUpdate


class CinemaComplete(BaseModel):
    id: int
    name: str
    address: AddressComplete
    sessions: list[SessionBase] = []
