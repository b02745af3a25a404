"""
Bookstore API

FastAPI application entry points for the three services:
- catalog  (books, port 3001)
- accounts (users, port 3003)
- orders   (orders, port 3002; calls the other two)
"""

import argparse
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

import httpx
from fastapi import APIRouter, FastAPI
from loguru import logger

from .schemas import HealthResponse
from .routes import books_router, users_router, orders_router
from .middleware import (
    LoggingConfig,
    setup_exception_handlers,
    setup_logging,
)
from .dependencies import ServiceContainer, Settings, get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

VERSION = "1.0.0"


@dataclass(frozen=True)
class ServiceDefinition:
    """What distinguishes one service application from another."""

    name: str
    title: str
    description: str
    router: APIRouter
    port_setting: str


SERVICES = {
    "catalog": ServiceDefinition(
        name="catalog",
        title="Service Livres",
        description="Book catalog management.",
        router=books_router,
        port_setting="catalog_port",
    ),
    "accounts": ServiceDefinition(
        name="accounts",
        title="Service Utilisateurs",
        description="User registration and credential verification.",
        router=users_router,
        port_setting="accounts_port",
    ),
    "orders": ServiceDefinition(
        name="orders",
        title="Service Commandes",
        description="Order placement, validated against the account and catalog services.",
        router=orders_router,
        port_setting="orders_port",
    ),
}


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Services are built lazily by the container, so startup only logs;
    shutdown closes peer clients and database pools.
    """
    definition: ServiceDefinition = app.state.service
    settings: Settings = app.state.container.settings
    logger.info(f"Starting {definition.title} in {settings.environment} mode")

    try:
        yield
    finally:
        logger.info(f"Shutting down {definition.title}...")
        await app.state.container.close()
        logger.info("Shutdown complete")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    service: str,
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application for one service.

    Args:
        service: "catalog", "accounts" or "orders".
        settings: Application settings. If None, loads from environment.
        container: Prebuilt service container (tests inject peer transports
            this way). Built from ``settings`` if None.

    Returns:
        Configured FastAPI application.
    """
    if service not in SERVICES:
        raise ValueError(f"Unknown service '{service}', expected one of {sorted(SERVICES)}")
    definition = SERVICES[service]

    if container is not None:
        settings = container.settings
    elif settings is None:
        settings = get_settings()
    if container is None:
        container = ServiceContainer(settings)

    app = FastAPI(
        title=definition.title,
        description=definition.description,
        version=VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.service = definition
    app.state.container = container

    # ==========================================================================
    # Middleware
    # ==========================================================================

    setup_logging(
        app,
        config=LoggingConfig(
            enabled=True,
            log_request_body=settings.debug,
        ),
        structured=settings.environment != "development",
    )

    setup_exception_handlers(app)

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(definition.router)

    # ==========================================================================
    # Root Routes
    # ==========================================================================

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint with API info."""
        return {
            "name": definition.title,
            "version": VERSION,
            "status": "running",
            "docs": "/docs" if settings.debug else None,
        }

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            service=definition.name,
            version=VERSION,
        )

    return app


def create_catalog_app(settings: Optional[Settings] = None) -> FastAPI:
    """Catalog service application."""
    return create_app("catalog", settings=settings)


def create_accounts_app(settings: Optional[Settings] = None) -> FastAPI:
    """Account service application."""
    return create_app("accounts", settings=settings)


def create_orders_app(
    settings: Optional[Settings] = None,
    accounts_transport: Optional[httpx.AsyncBaseTransport] = None,
    catalog_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Order service application.

    ``accounts_transport`` / ``catalog_transport`` replace the network
    for calls to the peer services.
    """
    container = ServiceContainer(
        settings or get_settings(),
        accounts_transport=accounts_transport,
        catalog_transport=catalog_transport,
    )
    return create_app("orders", container=container)


# =============================================================================
# Application Instances
# =============================================================================

catalog_app = create_catalog_app()
accounts_app = create_accounts_app()
orders_app = create_orders_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

def main(argv: Optional[list[str]] = None):
    """Run one of the services using uvicorn."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Run a bookstore service")
    parser.add_argument("service", choices=sorted(SERVICES), help="Service to run")
    parser.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: per-service setting)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args(argv)

    settings = get_settings()
    definition = SERVICES[args.service]
    port = args.port or getattr(settings, definition.port_setting)

    uvicorn.run(
        f"bookstore.api.main:{args.service}_app",
        host=args.host or settings.host,
        port=port,
        reload=args.reload,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
