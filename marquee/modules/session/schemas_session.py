from pydantic import BaseModel


class SessionBase(BaseModel):
    """A session is identified by the movie it screens and the cinema it takes place in"""

    movie_id: int
    cinema_id: int
