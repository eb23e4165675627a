import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from model_router.exceptions import ProviderConfigurationError

DEFAULT_PROVIDERS_FILE = Path(__file__).parent.parent / "providers.yaml"


class Settings(BaseSettings):
    env: str = "local"
    log_level: str = "INFO"
    log_file: str | None = "logs/app.log"

    openai_api_key: SecretStr = SecretStr("")
    openai_base_url: str | None = None
    azure_openai_api_key: SecretStr = SecretStr("")
    azure_openai_endpoint: str | None = None

    # Routing Configuration
    default_provider: str = "openai"
    fallback_provider: str = Field(
        default="azure",
        description="Provider whose chat/completions endpoint serves search-preview models",
    )

    providers_file: Path = DEFAULT_PROVIDERS_FILE

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("default_provider", "fallback_provider")
    @classmethod
    def validate_provider_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("provider name must not be empty")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


class ProviderSpec(BaseModel):
    """
    Connection details for one upstream provider.

    ``api_key_var`` and ``endpoint_var`` name attributes on ``Settings`` so
    secrets stay in the environment rather than in providers.yaml.
    """

    name: str
    client_class: str = Field(description="Dotted path to the async client class")
    api_key_var: str | None = None
    endpoint_var: str | None = None
    endpoint_kwarg: Literal["base_url", "azure_endpoint"] = "base_url"
    api_version: str | None = None
    timeout_s: float = Field(default=60.0, gt=0, description="Request timeout must be positive")


class ProviderRegistry:
    """
    Registry of configured providers, loaded from providers.yaml.
    """

    @classmethod
    def providers_dict(cls, path: Path | None = None) -> dict[str, ProviderSpec]:
        providers_file = path or settings.providers_file

        try:
            with open(providers_file, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ProviderConfigurationError(f"{providers_file} not found")
        except yaml.YAMLError as e:
            raise ProviderConfigurationError(f"Failed to parse {providers_file}: {e}")

        if not isinstance(data, dict):
            raise ProviderConfigurationError(f"{providers_file} must contain a mapping of providers")

        providers = {}
        for key, value in data.items():
            try:
                providers[key] = ProviderSpec(name=key, **(value or {}))
            except (TypeError, ValidationError) as e:
                raise ProviderConfigurationError(f"Invalid provider {key!r}: {e}", provider_name=key)

        return providers

    @classmethod
    def providers_list(cls, path: Path | None = None) -> list[ProviderSpec]:
        return list(cls.providers_dict(path).values())
