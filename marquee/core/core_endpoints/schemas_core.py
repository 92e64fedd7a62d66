from pydantic import BaseModel


class CoreInformation(BaseModel):
    """Information about Marquee"""

    ready: bool
    version: str
