import importlib
from typing import Any, Dict, Type

import structlog

from model_router.config import ProviderRegistry, ProviderSpec, settings
from model_router.exceptions import ProviderConfigurationError, UnknownProviderError

logger = structlog.get_logger()

_client_cache: Dict[str, Any] = {}


def import_class(class_path: str) -> Type[Any]:
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def _setting_value(var_name: str | None) -> str | None:
    if not var_name:
        return None
    value = getattr(settings, var_name, None)
    if value is not None and hasattr(value, "get_secret_value"):
        return value.get_secret_value()
    return value


def build_client(spec: ProviderSpec) -> Any:
    """
    Instantiate the async client described by a ProviderSpec.

    Raises:
        ProviderConfigurationError: If the class cannot be imported or the
            API key or a required endpoint is missing
    """
    try:
        client_class = import_class(spec.client_class)
    except (ImportError, AttributeError, ValueError) as e:
        raise ProviderConfigurationError(
            f"Could not import client class {spec.client_class}: {e}", provider_name=spec.name
        )

    api_key = _setting_value(spec.api_key_var)
    if not api_key:
        raise ProviderConfigurationError(
            f"{spec.api_key_var or 'API key'} not found for provider {spec.name}", provider_name=spec.name
        )

    kwargs: dict[str, Any] = {"api_key": api_key, "timeout": spec.timeout_s}

    endpoint = _setting_value(spec.endpoint_var)
    if endpoint:
        kwargs[spec.endpoint_kwarg] = endpoint
    elif spec.endpoint_kwarg == "azure_endpoint":
        raise ProviderConfigurationError(
            f"{spec.endpoint_var or 'endpoint'} not found for provider {spec.name}", provider_name=spec.name
        )

    if spec.api_version:
        kwargs["api_version"] = spec.api_version

    return client_class(**kwargs)


def get_client(name: str) -> Any:
    """
    Factory function to get an upstream client by provider name.
    Manages caching and instantiation of provider clients.
    """
    if name not in _client_cache:
        providers_dict = ProviderRegistry.providers_dict()
        if name not in providers_dict:
            raise UnknownProviderError(f"Unknown provider: {name}", provider_name=name)

        _client_cache[name] = build_client(providers_dict[name])
        logger.info("provider_client_created", provider=name)

    return _client_cache[name]


def clear_cache() -> None:
    _client_cache.clear()
