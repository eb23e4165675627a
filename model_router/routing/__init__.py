"""
Endpoint routing for language-model requests.
"""

from model_router.routing.adapter import DefaultModelApiAdapter, ModelApiAdapter
from model_router.routing.classifier import SEARCH_PREVIEW_MODELS, is_search_preview_model
from model_router.routing.result import RouteResult, SingleResult, StreamResult

__all__ = [
    "DefaultModelApiAdapter",
    "ModelApiAdapter",
    "RouteResult",
    "SEARCH_PREVIEW_MODELS",
    "SingleResult",
    "StreamResult",
    "is_search_preview_model",
]
