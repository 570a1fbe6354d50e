"""FastAPI application entry point for FitZone."""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import router as api_router
from app.config import Settings, get_settings
from app.dependencies import Clients, create_clients
from app.middleware.error_handler import ErrorHandlerMiddleware, request_validation_handler
from app.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build process-scoped clients on startup and release them on shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} API {settings.api_version}")
    logger.info(f"Running in {settings.environment} mode")

    owns_clients = getattr(app.state, "clients", None) is None
    if owns_clients:
        app.state.clients = create_clients(settings)

    yield

    if owns_clients:
        await app.state.clients.aclose()
    logger.info(f"Shutting down {settings.app_name} API")


def create_app(settings: Optional[Settings] = None, clients: Optional[Clients] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Settings to use, defaults to the environment settings
        clients: Pre-built clients (tests); built in the lifespan otherwise

    Returns:
        Configured application
    """
    settings = settings or get_settings()
    configure_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name,
        description="Gym membership API: plans, contract-code signup and member area",
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clients = clients

    # ── Middleware (order matters: last-added = outermost = first to run) ──

    # 1. Error handler added first → innermost layer
    app.add_middleware(ErrorHandlerMiddleware)

    # 2. CORS added last → outermost layer (processes OPTIONS preflight first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
