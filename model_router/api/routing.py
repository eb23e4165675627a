"""
Routing inspection routes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from model_router.dependencies import get_router_service
from model_router.models import RoutingDecision
from model_router.services.router_service import RouterService

router = APIRouter(
    prefix="/v1",
    tags=["routing"],
)


@router.get(
    "/models/{model}/routing",
    response_model=RoutingDecision,
    summary="Explain routing for a model",
    description="""
    Report how a request for the given model would be routed without calling upstream.

    Returns whether the model needs special handling, the provider that would
    serve it, and the endpoint used (`responses` or `chat.completions`).
    A preferred `provider` is only honoured for models without special handling.
    """,
)
async def get_routing(
    model: str,
    provider: Optional[str] = Query(default=None, description="Preferred provider"),
    router_service: RouterService = Depends(get_router_service),
) -> RoutingDecision:
    return router_service.describe(model, provider)
