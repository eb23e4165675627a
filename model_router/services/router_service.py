"""
Router Service for dispatching model requests.

This module contains the RouterService class that ties the routing policy to
configured provider clients.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

import structlog

from model_router.models import RoutingDecision
from model_router.routing.adapter import ModelApiAdapter
from model_router.routing.result import RouteResult

logger = structlog.get_logger()


@dataclass
class RoutedResponse:
    provider: str
    result: RouteResult
    notices: list[str] = field(default_factory=list)


class RouterService:
    """
    Dispatches requests through a ModelApiAdapter.

    For every request the service:
    1. Resolves the effective provider for the model
    2. Looks up that provider's client through the client factory
    3. Lets the adapter pick the endpoint and shape the parameters

    The service performs no retries and does not catch upstream errors.
    """

    def __init__(self, adapter: ModelApiAdapter, client_factory: Callable[[str], Any]):
        self.adapter = adapter
        self.client_factory = client_factory

    def describe(self, model: str, provider: Optional[str] = None) -> RoutingDecision:
        special = self.adapter.requires_special_handling(model)
        return RoutingDecision(
            model=model,
            requires_special_handling=special,
            effective_provider=self.adapter.get_effective_provider(model, provider),
            endpoint="chat.completions" if special else "responses",
        )

    async def handle_request(self, params: Mapping[str, Any], provider: Optional[str] = None) -> RoutedResponse:
        """
        Route a request to the endpoint its model requires.

        Args:
            params: Responses API request parameters
            provider: Caller's preferred provider, if any

        Returns:
            RoutedResponse with the provider used, the result and any
            fallback notices emitted during dispatch

        Raises:
            UnknownProviderError: If the effective provider is not configured
            ProviderConfigurationError: If its client cannot be built
        """
        model = params["model"]
        effective_provider = self.adapter.get_effective_provider(model, provider)
        log = logger.bind(model=model, provider=effective_provider)

        if provider and provider != effective_provider:
            log.info("provider_overridden", requested_provider=provider)

        client = self.client_factory(effective_provider)

        notices: list[str] = []
        log.info("dispatching_request", stream=bool(params.get("stream")))
        result = await self.adapter.create_response(client, params, notices.append)

        log.info("request_dispatched", result_kind=result.kind)
        return RoutedResponse(provider=effective_provider, result=result, notices=notices)
