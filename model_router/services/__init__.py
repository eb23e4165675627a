"""
Service layer for the Model Router.

This module dispatches requests to the endpoint each model requires.
"""

from model_router.services.router_service import RoutedResponse, RouterService

__all__ = ["RoutedResponse", "RouterService"]
