"""
Centralized dependency injection for FastAPI.

Instances are created once via @lru_cache() and can be overridden in tests
using app.dependency_overrides.
"""

from functools import lru_cache
from typing import Any, Callable

from model_router.config import settings
from model_router.providers.factory import get_client
from model_router.routing.adapter import DefaultModelApiAdapter, ModelApiAdapter
from model_router.services.router_service import RouterService


@lru_cache()
def get_adapter() -> ModelApiAdapter:
    """
    Get the routing policy used by the HTTP layer.

    Returns:
        ModelApiAdapter: Search-preview aware adapter configured from settings
    """
    return DefaultModelApiAdapter(
        default_provider=settings.default_provider,
        fallback_provider=settings.fallback_provider,
    )


def get_client_factory() -> Callable[[str], Any]:
    return get_client


@lru_cache()
def get_router_service() -> RouterService:
    """
    Get the RouterService instance.

    Returns:
        RouterService: Main request routing service
    """
    return RouterService(get_adapter(), get_client_factory())
