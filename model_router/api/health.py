"""
Health check and root endpoint routes.
"""

from fastapi import APIRouter

from model_router import __version__
from model_router.config import ProviderRegistry
from model_router.models import HealthResponse, RootResponse

router = APIRouter(
    tags=["health"],
)


@router.get(
    "/",
    response_model=RootResponse,
    summary="Service information",
    description="Returns basic service information and API documentation links",
)
async def root() -> RootResponse:
    """Root endpoint with service information."""
    return RootResponse(
        message="Welcome to Model Router",
        version=__version__,
        docs={"swagger": "/docs", "redoc": "/redoc"},
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="""
    Check that the service is up and its providers are configured.

    Returns 'healthy' if providers.yaml lists at least one provider, 'degraded' otherwise.
    Upstream APIs are not contacted.
    """,
)
async def health() -> HealthResponse:
    providers = list(ProviderRegistry.providers_dict())
    status = "healthy" if providers else "degraded"

    return HealthResponse(
        status=status,
        providers=providers,
        version=__version__,
    )
