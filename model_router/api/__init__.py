"""
API routers for the Model Router service.

This package contains all API endpoint routers organized by functionality.
"""

from model_router.api.health import router as health_router
from model_router.api.responses import router as responses_router
from model_router.api.routing import router as routing_router

__all__ = ["health_router", "responses_router", "routing_router"]
