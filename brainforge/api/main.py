"""
FastAPI application with assembled routers.

Initializes the FastAPI app with every API router, error handlers and
middleware, and launches it with uvicorn.

Dependencies: fastapi, uvicorn, brainforge.api.routers, brainforge.observability
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brainforge.api.error_handling import register_exception_handlers
from brainforge.boundary.db import create_tables, get_async_engine
from brainforge.configs import get_settings
from brainforge.observability import configure_logging
from brainforge.observability.langfuse_tracer import get_tracer
from brainforge.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    admin_router,
    ai_chat_router,
    ai_generate_router,
    ai_keys_router,
    auth_router,
    brainstorm_router,
    calendar_router,
    diagrams_router,
    discussions_router,
    goals_router,
    notes_router,
    notifications_router,
    projects_router,
    realtime_router,
    settings_router,
    sprints_router,
    system_router,
    tasks_router,
    teams_router,
    uploads_router,
    users_router,
)

API_ROUTERS = (
    system_router,
    auth_router,
    teams_router,
    projects_router,
    tasks_router,
    users_router,
    brainstorm_router,
    diagrams_router,
    sprints_router,
    calendar_router,
    notes_router,
    discussions_router,
    goals_router,
    notifications_router,
    ai_chat_router,
    ai_generate_router,
    ai_keys_router,
    settings_router,
    admin_router,
    realtime_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Creating database tables...")
    await create_tables()
    logger.info("Database ready", extra={"environment": settings.environment})
    insecure = settings.insecure_defaults()
    if insecure:
        log = logger.error if settings.is_production else logger.warning
        log("Placeholder secrets in use", extra={"settings": insecure})

    yield

    # Shutdown
    get_tracer().flush()
    await get_async_engine().dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="BrainForge API",
        description="Collaborative project management with AI brainstorming",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Every REST and websocket route lives under the API prefix
    for router in API_ROUTERS:
        app.include_router(router, prefix=settings.app.api_prefix)
    app.include_router(uploads_router)

    return app


app = create_app()


def run() -> None:
    """Console script entry point."""
    settings = get_settings()
    uvicorn.run(
        "brainforge.api.main:app",
        host=settings.app.host,
        port=settings.app.port,
    )


if __name__ == "__main__":
    run()
