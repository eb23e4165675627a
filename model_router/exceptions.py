class RouterError(Exception):
    """Base exception for all Model Router errors."""

    pass


class ProviderConfigurationError(RouterError):
    """Raised when a provider is missing, misconfigured, or cannot be built."""

    def __init__(self, message: str, provider_name: str = None):
        super().__init__(message)
        self.provider_name = provider_name


class UnknownProviderError(ProviderConfigurationError):
    """Raised when a request names a provider that is not in providers.yaml."""

    pass
