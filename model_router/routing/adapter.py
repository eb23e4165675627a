"""
Model endpoint routing.

Decides, per request, whether a model is served by the Responses API or must
fall back to chat/completions through the compatibility shim, and shapes the
request parameters for the chosen endpoint.
"""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Callable, Mapping, Optional

import structlog

from model_router.routing.chat_shim import responses_create_via_chat_completions
from model_router.routing.classifier import is_search_preview_model
from model_router.routing.result import RouteResult, SingleResult, StreamResult

logger = structlog.get_logger()

DEFAULT_PROVIDER = "openai"
FALLBACK_PROVIDER = "azure"

CompatibilityShim = Callable[[Any, Mapping[str, Any]], AsyncIterator[Any]]
FallbackCallback = Callable[[str], None]


class ModelApiAdapter(ABC):
    """
    Abstract base class for model routing policies.
    """

    @abstractmethod
    def requires_special_handling(self, model: str) -> bool:
        pass

    @abstractmethod
    def get_effective_provider(self, model: str, original_provider: Optional[str] = None) -> str:
        pass

    @abstractmethod
    async def create_response(
        self,
        client: Any,
        params: Mapping[str, Any],
        on_fallback_message: Optional[FallbackCallback] = None,
    ) -> RouteResult:
        pass


class DefaultModelApiAdapter(ModelApiAdapter):
    """
    Routes search-preview models to chat/completions, everything else to the
    Responses API.

    Search-preview models cannot do function calling, so their tools are
    stripped and tool_choice is forced to "none" before the request reaches
    the shim. The caller's parameters are never modified in place.
    """

    def __init__(
        self,
        shim: CompatibilityShim = responses_create_via_chat_completions,
        default_provider: str = DEFAULT_PROVIDER,
        fallback_provider: str = FALLBACK_PROVIDER,
    ):
        self.shim = shim
        self.default_provider = default_provider
        self.fallback_provider = fallback_provider

    def requires_special_handling(self, model: str) -> bool:
        return is_search_preview_model(model)

    def get_effective_provider(self, model: str, original_provider: Optional[str] = None) -> str:
        # The fallback provider's chat/completions endpoint is the only one
        # that can serve these models, whatever the caller configured
        if self.requires_special_handling(model):
            return self.fallback_provider
        return original_provider or self.default_provider

    async def create_response(
        self,
        client: Any,
        params: Mapping[str, Any],
        on_fallback_message: Optional[FallbackCallback] = None,
    ) -> RouteResult:
        """
        Dispatch a request to the endpoint the model requires.

        Args:
            client: An AsyncOpenAI-compatible client
            params: Responses API request parameters; ``model`` is required
            on_fallback_message: Called once with a status message when the
                request is rerouted to chat/completions

        Returns:
            StreamResult for search-preview models and streaming requests,
            SingleResult otherwise

        Raises:
            Whatever the client, the shim or the callback raise, unchanged
        """
        model = params["model"]

        if self.requires_special_handling(model):
            logger.info("search_preview_fallback", model=model, endpoint="chat.completions")

            if on_fallback_message:
                on_fallback_message(f"🔍 Using web search with {model}...")

            chat_params = {
                **params,
                "tools": [],
                "tool_choice": "none",
            }
            # The shim only has a streaming contract
            return StreamResult(self.shim(client, chat_params))

        response = await client.responses.create(**params)
        if params.get("stream"):
            return StreamResult(response)
        return SingleResult(response)
