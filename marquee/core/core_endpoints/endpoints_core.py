from fastapi import APIRouter, Depends

from marquee.core.core_endpoints import schemas_core
from marquee.core.utils.config import Settings
from marquee.dependencies import get_settings
from marquee.types.module import Module

router = APIRouter(tags=["Core"])

core_module = Module(
    tag="Core",
    router=router,
    factory=None,
)


@router.get(
    "/information",
    response_model=schemas_core.CoreInformation,
    status_code=200,
)
async def read_information(
    settings: Settings = Depends(get_settings),
):
    """
    Return information about Marquee. This endpoint can be used to check if the API is up.
    """

    return schemas_core.CoreInformation(
        ready=True,
        version=settings.MARQUEE_VERSION,
    )
