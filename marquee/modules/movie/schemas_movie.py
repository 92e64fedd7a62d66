from pydantic import BaseModel, Field

from marquee.modules.session.schemas_session import SessionBase


class MovieBase(BaseModel):
    title: str = Field(min_length=1)
    genre: str = Field(min_length=1, max_length=50)
    # Duration in minutes
    duration: int = Field(gt=0, le=600)


class MovieUpdate(MovieBase):
    """Every mutable field of a movie. Used by both full (PUT) and partial (PATCH) updates"""


class MovieComplete(MovieBase):
    id: int
    sessions: list[SessionBase] = []
