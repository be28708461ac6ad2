"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_pos import __version__
from inventory_pos.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from inventory_pos.api.middleware.error_handler import setup_exception_handlers
from inventory_pos.api.routes import (
    clients_router,
    customers_router,
    health_router,
    inventory_router,
    products_router,
    purchases_router,
    sales_router,
    suppliers_router,
    variants_router,
)
from inventory_pos.config import configure_logging, get_logger, get_settings
from inventory_pos.core.exceptions import ConfigurationError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the pool on startup, closes it on
    shutdown.
    """
    from inventory_pos.infrastructure.storage.sqlite import close_pool, get_pool
    from inventory_pos.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        results = await run_migrations()
        failed = [r.version for r in results if not r.success]
        if failed:
            raise ConfigurationError(f"Database migrations failed: {failed}")
        logger.info("database_initialized", migrations_applied=len(results))

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Inventory POS API",
        description="Multi-tenant inventory: products, variants, purchases, sales and stock",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(clients_router)
    app.include_router(suppliers_router)
    app.include_router(customers_router)
    app.include_router(variants_router)
    app.include_router(products_router)
    app.include_router(purchases_router)
    app.include_router(sales_router)
    app.include_router(inventory_router)

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "inventory_pos.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
