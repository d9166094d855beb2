"""Auction Service - Main Application Entry Point.

Lists vehicles for auction and announces every change on the message bus,
built on the Neuroglia framework with CQRS and Clean Architecture.

Follows the same patterns as agent-host and tools-provider.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from neuroglia.hosting.web import SubAppConfig, WebApplicationBuilder
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.observability import Observability
from neuroglia.serialization.json import JsonSerializer

from application.services import AuctionEventPublisher, AuctionLifecycleOptions
from application.settings import app_settings, configure_logging

# Domain repository interfaces
from domain.repositories import AuctionRepository

# Infrastructure
from infrastructure.services import HttpCloudEventPublisher, InMemoryEventPublisher

# Integration layer - repository implementations
from integration.repositories import InMemoryAuctionRepository, MotorAuctionRepository

configure_logging(log_level=app_settings.log_level)
log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the Auction Service application.

    Creates the API backend (/api prefix) plus the root health endpoints.

    Returns:
        Configured FastAPI application with Neuroglia framework
    """
    log.debug("🚀 Creating Auction Service application...")

    builder = WebApplicationBuilder(app_settings=app_settings)

    # Configure core Neuroglia services
    Mediator.configure(
        builder,
        [
            "application.commands",
            "application.queries",
        ],
    )
    Mapper.configure(
        builder,
        [
            "application.commands",
            "application.queries",
            "integration.models",
        ],
    )
    JsonSerializer.configure(
        builder,
        [
            "domain.entities",
            "domain.models",
            "integration.models",
        ],
    )
    Observability.configure(builder)

    # Configure storage and message bus
    _configure_infrastructure_services(builder)

    builder.add_sub_app(
        SubAppConfig(
            path="/api",
            name="api",
            title=f"{app_settings.app_name} API",
            description="Vehicle auction listings",
            version=app_settings.app_version,
            controllers=["api.controllers"],
            docs_url="/docs",
        )
    )

    # Build the application
    app = builder.build_app_with_lifespan(
        title="Auction Service",
        description="Vehicle auction listings publishing lifecycle events",
        version=app_settings.app_version,
        debug=app_settings.debug,
    )

    if app_settings.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Add health check endpoints
    _configure_health_endpoints(app)

    log.info("✅ Auction Service application created successfully!")
    log.info("📊 Access points:")
    log.info(f"   - API: http://localhost:{app_settings.app_port}/api/auctions")
    log.info(f"   - API Docs: http://localhost:{app_settings.app_port}/api/docs")
    return app


def _create_auction_repository() -> AuctionRepository:
    if app_settings.auction_store == "memory":
        log.warning("Auctions are kept in memory and will be lost on restart")
        return InMemoryAuctionRepository()
    return MotorAuctionRepository.from_connection_string(
        app_settings.connection_strings["mongo"],
        app_settings.database_name,
        app_settings.auction_collection_name,
    )


def _create_event_publisher() -> AuctionEventPublisher:
    if app_settings.event_publisher == "memory":
        log.warning("Auction events are recorded in memory and never leave the process")
        return InMemoryEventPublisher()
    return HttpCloudEventPublisher(
        sink_url=app_settings.cloud_event_sink,
        source=app_settings.cloud_event_source,
        type_prefix=app_settings.cloud_event_type_prefix,
        http_timeout=app_settings.publish_timeout_seconds,
    )


def _configure_infrastructure_services(builder: WebApplicationBuilder) -> None:
    """Configure infrastructure services in the DI container.

    Args:
        builder: The WebApplicationBuilder
    """
    log.info("🔧 Configuring infrastructure services...")

    builder.services.add_singleton(AuctionRepository, singleton=_create_auction_repository())
    builder.services.add_singleton(AuctionEventPublisher, singleton=_create_event_publisher())
    builder.services.add_singleton(
        AuctionLifecycleOptions,
        singleton=AuctionLifecycleOptions(
            store_timeout_seconds=app_settings.store_timeout_seconds,
            publish_timeout_seconds=app_settings.publish_timeout_seconds,
        ),
    )

    log.info(f"✅ Infrastructure services configured (store={app_settings.auction_store}, events={app_settings.event_publisher})")


def _configure_health_endpoints(app: FastAPI) -> None:
    """Add health check and info endpoints to the app.

    Args:
        app: FastAPI application
    """

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Basic health check."""
        return {"status": "healthy", "service": "auction-service"}

    @app.get("/health/ready", tags=["Health"])
    async def readiness_check():
        """Readiness check including dependencies."""
        checks = {"service": "ready"}

        repository = app.state.services.get_required_service(AuctionRepository)
        if isinstance(repository, MotorAuctionRepository):
            checks["mongodb"] = "ready" if await repository.ping_async() else "not_ready"

        all_ready = all(v == "ready" for v in checks.values())
        return {"status": "ready" if all_ready else "degraded", "checks": checks}

    @app.get("/info", tags=["Health"])
    async def info():
        """Application version and the configured store and message bus."""
        return {
            "name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": "development" if app_settings.debug else "production",
            "auction_store": app_settings.auction_store,
            "event_publisher": app_settings.event_publisher,
        }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=app_settings.debug,
    )
