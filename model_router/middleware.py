"""
Middleware and error handlers for the Model Router service.

This module contains HTTP middleware for logging and request tracking,
as well as exception handlers mapping router and upstream errors to HTTP
responses.
"""

import time
import uuid

import openai
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from model_router.exceptions import ProviderConfigurationError, RouterError, UnknownProviderError


async def logging_middleware(request: Request, call_next):
    """
    HTTP middleware that logs all requests and responses with timing information.

    Assigns a unique request ID to each request for tracing and adds it to
    the response headers as 'X-Request-ID'.

    Args:
        request: The incoming HTTP request
        call_next: Function to call the next middleware/endpoint

    Returns:
        Response from the endpoint with X-Request-ID header
    """
    request_id = str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id

        structlog.get_logger().info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            latency_s=process_time,
        )
        return response
    except Exception as e:
        process_time = time.time() - start_time
        structlog.get_logger().error(
            "request_failed",
            method=request.method,
            path=request.url.path,
            latency_s=process_time,
            error=str(e),
        )
        raise


async def unknown_provider_handler(request: Request, exc: UnknownProviderError) -> JSONResponse:
    """
    Handler for UnknownProviderError exceptions.

    The caller named a provider that is not configured, so this is a 400.
    """
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "provider": exc.provider_name},
    )


async def provider_configuration_handler(request: Request, exc: ProviderConfigurationError) -> JSONResponse:
    structlog.get_logger().error("provider_misconfigured", provider=exc.provider_name, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"detail": f"Provider configuration error: {str(exc)}"},
    )


async def upstream_status_handler(request: Request, exc: openai.APIStatusError) -> JSONResponse:
    """
    Handler for error responses returned by the upstream API.

    The upstream status code and message are passed through unchanged.

    Args:
        request: The HTTP request that triggered the error
        exc: The openai.APIStatusError exception

    Returns:
        JSONResponse with the upstream status code
    """
    structlog.get_logger().warning("upstream_error", status_code=exc.status_code, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def upstream_connection_handler(request: Request, exc: openai.APIConnectionError) -> JSONResponse:
    structlog.get_logger().error("upstream_unreachable", error=str(exc))
    return JSONResponse(
        status_code=502,
        content={"detail": f"Upstream unreachable: {str(exc)}"},
    )


async def router_exception_handler(request: Request, exc: RouterError) -> JSONResponse:
    """
    Handler for generic router exceptions.

    Returns a 500 status code for internal errors.
    """
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal error: {str(exc)}"},
    )


def register_middleware(app: FastAPI) -> None:
    """
    Register all middleware with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.middleware("http")(logging_middleware)


def register_error_handlers(app: FastAPI) -> None:
    """
    Register all custom exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(UnknownProviderError, unknown_provider_handler)
    app.add_exception_handler(ProviderConfigurationError, provider_configuration_handler)
    app.add_exception_handler(openai.APIStatusError, upstream_status_handler)
    app.add_exception_handler(openai.APIConnectionError, upstream_connection_handler)
    app.add_exception_handler(RouterError, router_exception_handler)
