from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResponseRequest(BaseModel):
    """
    Responses API request body.

    Only the fields routing looks at are declared; every other Responses
    parameter is accepted as-is and forwarded upstream.
    """

    model: str = Field(min_length=1)
    input: Optional[Union[str, list[dict[str, Any]]]] = None
    instructions: Optional[str] = None
    tools: Optional[list[dict[str, Any]]] = None
    tool_choice: Optional[Union[str, dict[str, Any]]] = None
    stream: bool = False
    provider: Optional[str] = Field(default=None, description="Preferred provider; may be overridden by routing")

    model_config = ConfigDict(extra="allow")

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("model must not be blank")
        return v

    def to_params(self) -> dict[str, Any]:
        """Request parameters as sent upstream: explicitly set fields only, without routing hints."""
        return self.model_dump(exclude_unset=True, exclude={"provider"})


class RoutingDecision(BaseModel):
    model: str
    requires_special_handling: bool
    effective_provider: str
    endpoint: Literal["responses", "chat.completions"]


# Response models for API endpoints


class RootResponse(BaseModel):
    """Response model for root endpoint."""

    message: str
    version: str
    docs: dict[str, str]


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: Literal["healthy", "degraded"]
    providers: list[str]
    version: str
