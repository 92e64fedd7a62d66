from pydantic import BaseModel, Field


class AddressBase(BaseModel):
    street: str = Field(min_length=1)
    number: int = Field(gt=0)


class AddressUpdate(AddressBase):
    """Every mutable field of an address. Used by both full (PUT) and partial (PATCH) updates"""


class AddressComplete(AddressBase):
    id: int
