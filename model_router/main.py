"""
Main application module for the Model Router service.

Contains the create_app factory function for configuring and initializing
the FastAPI application with all routers, middleware, and error handlers.
"""

from fastapi import FastAPI

from model_router import __version__
from model_router.api import health_router, responses_router, routing_router
from model_router.logging_config import configure_logging
from model_router.middleware import register_error_handlers, register_middleware


def create_app() -> FastAPI:
    """
    Creates and configures the FastAPI application instance.

    Sets up logging, middleware, error handlers, and API routers.
    Dependencies are provided by model_router/dependencies.py.

    Returns:
        Configured FastAPI application
    """
    configure_logging()

    app = FastAPI(
        title="Model Router",
        description="Routes model requests to the Responses API or, for search-preview models, to chat/completions.",
        version=__version__,
    )

    register_error_handlers(app)
    register_middleware(app)

    app.include_router(health_router)
    app.include_router(responses_router)
    app.include_router(routing_router)

    return app


app = create_app()
