from fastapi import APIRouter

from marquee.types.factory import Factory


class Module:
    def __init__(
        self,
        tag: str,
        factory: Factory | None,
        router: APIRouter | None = None,
    ):
        """
        A group of endpoints, mounted on the application when its file matches `modules/*/endpoints_*.py`.
        :param tag: the OpenAPI tag of the endpoints
        :param factory: a factory filling the module tables with demo data when `USE_FACTORIES` is enabled
        :param router: an optional custom APIRouter
        """
        self.router = router or APIRouter(tags=[tag])
        self.factory = factory
